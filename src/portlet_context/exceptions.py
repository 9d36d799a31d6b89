"""Exception types raised by the portlet context helpers."""

from typing import Optional


class PortletContextError(Exception):
    """Base class for all custom exceptions in the portlet_context library."""

    pass


class InvalidContainerError(PortletContextError, ValueError):
    """Raised when no attribute container was supplied to a lookup."""

    pass


class ContextStartupError(PortletContextError, RuntimeError):
    """Raised when the root context failed to start or cannot be started.

    When a loader recorded a checked failure in the container, the lookup
    wraps it in this error; the original is available as ``cause`` and as
    ``__cause__``.
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class ContextTypeError(PortletContextError, RuntimeError):
    """Raised when a context attribute holds a value of an unexpected type."""

    pass


class ContextNotFoundError(PortletContextError, RuntimeError):
    """Raised when a required application context is not registered."""

    pass


class ConfigurationError(PortletContextError):
    """Raised when loader settings cannot be read or validated."""

    pass


__all__ = [
    "PortletContextError",
    "InvalidContainerError",
    "ContextStartupError",
    "ContextTypeError",
    "ContextNotFoundError",
    "ConfigurationError",
]
