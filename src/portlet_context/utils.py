"""Convenience lookups for the root application context of a portlet application.

The root context is published into the shared attribute container by a
:class:`~portlet_context.loader.ContextLoader`. These helpers are the most
generic way to get it back out: they read a single attribute, re-raise any
failure the loader recorded there, and check the type of what they find.

Examples:
    >>> from portlet_context import AttributeStore, get_application_context
    >>> get_application_context(AttributeStore()) is None
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from types import TracebackType
from typing import Any, NoReturn, Optional

from portlet_context.exceptions import (
    ContextNotFoundError,
    ContextStartupError,
    ContextTypeError,
    InvalidContainerError,
)
from portlet_context.keys import ROOT_ATTRIBUTE, ROOT_LOADER_ATTRIBUTE
from portlet_context.types import ApplicationContext


def _read_attribute(container: Any, attr_name: str) -> Any:
    if container is None:
        raise InvalidContainerError("Attribute container must not be None")
    if isinstance(container, Mapping):
        return container.get(attr_name)
    getter = getattr(container, "get_attribute", None)
    if not callable(getter):
        raise InvalidContainerError(
            f"Object of type {type(container).__name__} is not an attribute container"
        )
    return getter(attr_name)


def _is_unchecked(error: BaseException) -> bool:
    # RuntimeError and interpreter-level exits propagate as they are.
    return isinstance(error, RuntimeError) or not isinstance(error, Exception)


def _startup_traceback(error: BaseException) -> Optional[TracebackType]:
    """Return the part of ``error``'s traceback recorded before any lookup.

    Frames added while an earlier lookup propagated the failure sit above
    the deepest ``_reraise`` entry and are dropped.
    """
    origin = tb = error.__traceback__
    while tb is not None:
        if tb.tb_frame.f_code is _reraise.__code__:
            origin = tb.tb_next
        tb = tb.tb_next
    return origin


def _reraise(error: BaseException) -> NoReturn:
    # The stored failure is shared; keep its context and traceback bounded.
    context = error.__context__
    try:
        raise error.with_traceback(_startup_traceback(error))
    finally:
        error.__context__ = context


def _describe(error: BaseException) -> str:
    message = str(error)
    return f"{type(error).__name__}: {message}" if message else type(error).__name__


class PortletApplicationContextUtils:
    """Static helpers for finding the application context in a container."""

    @staticmethod
    def get_required_portlet_application_context(container: Any) -> ApplicationContext:
        """Find the root application context, failing if there is none.

        Will re-raise an exception that happened on root context startup,
        to tell a failed startup apart from no context at all.

        Args:
            container: Attribute container to find the application context in.

        Returns:
            The root application context for this portlet application.

        Raises:
            InvalidContainerError: If ``container`` is None.
            ContextNotFoundError: If no root application context is registered.
        """
        context = PortletApplicationContextUtils.get_portlet_application_context(container)
        if context is None:
            raise ContextNotFoundError(
                "No application context found: no context loader registered?"
            )
        return context

    @staticmethod
    def get_portlet_application_context(
        container: Any, attr_name: str = ROOT_ATTRIBUTE
    ) -> Optional[ApplicationContext]:
        """Find an application context stored under ``attr_name``.

        Args:
            container: Attribute container to look in, either an
                :class:`~portlet_context.types.AttributeContainer` or a mapping.
            attr_name: Name of the attribute to read. Defaults to the root
                context attribute.

        Returns:
            The application context, or None if the attribute is not set.

        Raises:
            InvalidContainerError: If ``container`` is None.
            ContextStartupError: If the attribute holds a checked exception;
                the stored exception is chained as the cause.
            ContextTypeError: If the attribute holds anything other than an
                application context.
        """
        attr = _read_attribute(container, attr_name)
        if attr is None:
            return None
        if isinstance(attr, BaseException):
            if _is_unchecked(attr):
                _reraise(attr)
            raise ContextStartupError(_describe(attr), cause=attr) from attr
        if not isinstance(attr, ApplicationContext):
            raise ContextTypeError(
                f"Context attribute is not of type ApplicationContext: {attr!r}"
            )
        return attr

    @staticmethod
    def get_context_loader(container: Any) -> Optional[Any]:
        """Return the loader registered in ``container``, or None."""
        return _read_attribute(container, ROOT_LOADER_ATTRIBUTE)


get_application_context = PortletApplicationContextUtils.get_portlet_application_context
get_required_application_context = (
    PortletApplicationContextUtils.get_required_portlet_application_context
)
get_context_loader = PortletApplicationContextUtils.get_context_loader


__all__ = [
    "PortletApplicationContextUtils",
    "get_application_context",
    "get_required_application_context",
    "get_context_loader",
]
