"""Loader settings.

Settings are resolved from three sources, later ones taking precedence:

1. Defaults declared on :class:`LoaderSettings`
2. A YAML file, either flat or under a top-level ``portlet_context`` key
3. ``PORTLET_CONTEXT_*`` environment variables
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from portlet_context.exceptions import ConfigurationError
from portlet_context.keys import ROOT_ATTRIBUTE, ROOT_LOADER_ATTRIBUTE

ENV_PREFIX = "PORTLET_CONTEXT_"

# Environment variable suffix -> settings field
_ENV_FIELDS = {
    "ATTRIBUTE": "context_attribute",
    "LOADER_ATTRIBUTE": "loader_attribute",
    "ID": "context_id",
    "PUBLISH_FAILURES": "publish_failures",
    "LOG_LEVEL": "log_level",
}

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


class LoaderSettings(BaseModel):
    """Settings for a :class:`~portlet_context.loader.ContextLoader`.

    Attributes:
        context_attribute: Attribute the created context is published under
        loader_attribute: Attribute the loader registers itself under
        context_id: Optional id handed to the context factory
        publish_failures: Whether a startup failure is stored in the container
        log_level: Level a host hands to ``configure_logging(level=...)``
    """

    context_attribute: str = ROOT_ATTRIBUTE
    loader_attribute: str = ROOT_LOADER_ATTRIBUTE
    context_id: Optional[str] = None
    publish_failures: bool = True
    log_level: str = "INFO"

    model_config = {"extra": "forbid", "frozen": True}

    @field_validator("context_attribute", "loader_attribute")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("attribute names must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level '{value}'")
        return level

    @property
    def numeric_log_level(self) -> int:
        return getattr(logging, self.log_level)


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read settings file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Settings file {path} must contain a mapping")
    section = data.get("portlet_context", data)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'portlet_context' section in {path} must be a mapping")
    return section


def _read_env(env: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for suffix, field in _ENV_FIELDS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw != "":
            values[field] = raw
    return values


def load_settings(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
) -> LoaderSettings:
    """Build :class:`LoaderSettings` from defaults, a YAML file and the environment.

    Args:
        path: Optional YAML file. A missing file is an error when given.
        env: Environment mapping; defaults to ``os.environ``.

    Returns:
        Validated settings.

    Raises:
        ConfigurationError: If the file cannot be read or validation fails.
    """
    values: Dict[str, Any] = {}
    if path is not None:
        values.update(_read_yaml(Path(path)))
    values.update(_read_env(os.environ if env is None else env))

    try:
        return LoaderSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid loader settings: {e}") from e


__all__ = ["ENV_PREFIX", "LoaderSettings", "load_settings"]
