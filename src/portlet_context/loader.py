"""Root application context loader.

The loader is the component that fills the attribute container at startup:
it registers itself, builds the root application context and publishes it
so that :mod:`portlet_context.utils` can find it. If building the context
fails, the failure itself is published in the context slot so that later
lookups report the real cause instead of "no context found".
"""

from __future__ import annotations

import logging
import threading
import time
import traceback
from typing import Any, Callable, Optional

from portlet_context.config import LoaderSettings
from portlet_context.exceptions import ContextStartupError, ContextTypeError
from portlet_context.types import ApplicationContext, AttributeContainer, StaticApplicationContext

logger = logging.getLogger(__name__)

ContextFactory = Callable[[AttributeContainer, LoaderSettings], ApplicationContext]


def default_context_factory(
    container: AttributeContainer, settings: LoaderSettings
) -> ApplicationContext:
    """Create an empty :class:`StaticApplicationContext` named after the settings."""
    return StaticApplicationContext(context_id=settings.context_id)


class ContextLoader:
    """Builds the root application context and binds it into a container.

    Args:
        context_factory: Callable producing the application context. It
            receives the container and the loader settings.
        settings: Loader settings; defaults are used when omitted. The
            loader never changes logger levels; hosts apply
            ``settings.log_level`` with
            :func:`~portlet_context.logging_utils.configure_logging`.
    """

    def __init__(
        self,
        context_factory: Optional[ContextFactory] = None,
        settings: Optional[LoaderSettings] = None,
    ) -> None:
        self._factory = context_factory or default_context_factory
        self.settings = settings or LoaderSettings()
        self._lock = threading.RLock()
        self._context: Optional[ApplicationContext] = None

    @property
    def current_context(self) -> Optional[ApplicationContext]:
        """The context created by this loader, or None before init/after close."""
        return self._context

    def init_application_context(self, container: AttributeContainer) -> ApplicationContext:
        """Create the root context and publish it in ``container``.

        Args:
            container: Attribute container owned by the host framework.

        Returns:
            The newly created application context.

        Raises:
            ContextStartupError: If a root context is already present.
            ContextTypeError: If the factory returns something that is not an
                application context.
        """
        settings = self.settings
        with self._lock:
            if container.get_attribute(settings.context_attribute) is not None:
                raise ContextStartupError(
                    "Cannot initialize context because there is already a root "
                    "application context present - check whether you have "
                    "multiple context loaders registered"
                )

            logger.info("Initializing root application context")
            container.set_attribute(settings.loader_attribute, self)
            start = time.perf_counter()
            try:
                context = self._factory(container, settings)
                if not isinstance(context, ApplicationContext):
                    raise ContextTypeError(
                        f"Context factory returned {context!r}, not an ApplicationContext"
                    )
            except BaseException as e:
                logger.error("Context initialization failed: %s", e, exc_info=True)
                if settings.publish_failures:
                    # Published failures outlive the factory; drop its locals.
                    traceback.clear_frames(e.__traceback__)
                    container.set_attribute(settings.context_attribute, e)
                raise

            container.set_attribute(settings.context_attribute, context)
            self._context = context
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "Root application context '%s' initialized in %.0f ms",
                getattr(context, "id", context),
                elapsed_ms,
            )
            return context

    def close_application_context(self, container: AttributeContainer) -> None:
        """Close the context created by this loader and unbind it.

        Safe to call more than once, and after a failed initialization.
        """
        settings = self.settings
        with self._lock:
            context = self._context
            self._context = None
            try:
                if context is not None:
                    logger.debug("Closing root application context '%s'", context.id)
                    close: Any = getattr(context, "close", None)
                    if callable(close):
                        close()
            finally:
                container.remove_attribute(settings.context_attribute)
                if container.get_attribute(settings.loader_attribute) is self:
                    container.remove_attribute(settings.loader_attribute)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(context_attribute={self.settings.context_attribute!r})"


__all__ = ["ContextFactory", "ContextLoader", "default_context_factory"]
