"""Logging utilities for portlet_context (thin wrappers).

All library loggers live under the ``portlet_context`` hierarchy. Nothing is
configured on import; applications call :func:`configure_logging` if they
want the library to install its own handler.
"""

from __future__ import annotations

import logging
from typing import Union

ROOT_LOGGER_NAME = "portlet_context"

_DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger by name (no prefixing).

    Args:
        name: Logger name (typically ``__name__``).

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)


def _level_value(level: Union[str, int]) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def configure_logging(verbose: bool = False, level: Union[str, int, None] = None) -> None:
    """Install a single stream handler on the package logger.

    Args:
        verbose: Log at DEBUG when True, INFO otherwise.
        level: Explicit level overriding ``verbose``.
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if level is not None:
        logger.setLevel(_level_value(level))
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    if not any(getattr(h, "_portlet_context", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        handler._portlet_context = True  # type: ignore[attr-defined]
        logger.addHandler(handler)


def set_component_level(component: str, level: Union[str, int]) -> None:
    """Set log level for a specific component.

    Accepts either string levels (e.g., "INFO") or numeric constants.
    Component names are relative to the package, so ``"loader"`` addresses
    ``portlet_context.loader``.
    """
    if not component.startswith(ROOT_LOGGER_NAME):
        component = f"{ROOT_LOGGER_NAME}.{component}"
    logging.getLogger(component).setLevel(_level_value(level))


__all__ = ["ROOT_LOGGER_NAME", "get_logger", "configure_logging", "set_component_level"]
