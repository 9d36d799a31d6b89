"""Lookup helpers for the root application context of a portlet application.

Examples:
    >>> from portlet_context import AttributeStore, ContextLoader
    >>> from portlet_context import get_required_application_context
    >>> container = AttributeStore()
    >>> ctx = ContextLoader().init_application_context(container)
    >>> get_required_application_context(container) is ctx
    True
"""

from portlet_context.config import LoaderSettings, load_settings
from portlet_context.exceptions import (
    ConfigurationError,
    ContextNotFoundError,
    ContextStartupError,
    ContextTypeError,
    InvalidContainerError,
    PortletContextError,
)
from portlet_context.keys import ROOT_ATTRIBUTE, ROOT_LOADER_ATTRIBUTE
from portlet_context.loader import ContextLoader
from portlet_context.logging_utils import configure_logging
from portlet_context.types import (
    ApplicationContext,
    AttributeContainer,
    AttributeStore,
    StaticApplicationContext,
)
from portlet_context.utils import (
    PortletApplicationContextUtils,
    get_application_context,
    get_context_loader,
    get_required_application_context,
)

__version__ = "0.1.0"

__all__ = [
    "ROOT_ATTRIBUTE",
    "ROOT_LOADER_ATTRIBUTE",
    "ApplicationContext",
    "AttributeContainer",
    "AttributeStore",
    "StaticApplicationContext",
    "PortletApplicationContextUtils",
    "get_application_context",
    "get_required_application_context",
    "get_context_loader",
    "ContextLoader",
    "LoaderSettings",
    "load_settings",
    "configure_logging",
    "PortletContextError",
    "InvalidContainerError",
    "ContextStartupError",
    "ContextTypeError",
    "ContextNotFoundError",
    "ConfigurationError",
]
