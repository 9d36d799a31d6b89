"""Well-known attribute names used to publish the root application context."""

from portlet_context.types import ApplicationContext

_NAMESPACE = f"{ApplicationContext.__module__}.{ApplicationContext.__qualname__}"

# Attribute the root ContextLoader binds itself to.
ROOT_LOADER_ATTRIBUTE = f"{_NAMESPACE}.ROOT_LOADER"

# Attribute the root application context is bound to on successful startup.
# If startup fails this attribute can hold the exception instead; use the
# lookup helpers in portlet_context.utils to read it.
ROOT_ATTRIBUTE = f"{_NAMESPACE}.ROOT"

__all__ = ["ROOT_LOADER_ATTRIBUTE", "ROOT_ATTRIBUTE"]
