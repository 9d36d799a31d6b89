"""Shared fixtures for the portlet_context test suite."""

import logging

import pytest

from portlet_context import AttributeStore, StaticApplicationContext
from portlet_context.logging_utils import ROOT_LOGGER_NAME


@pytest.fixture
def container():
    """An empty thread-safe attribute container."""
    return AttributeStore()


@pytest.fixture
def app_context():
    """A small application context with one bean."""
    return StaticApplicationContext(
        context_id="test-root", beans={"greeting": "hello"}
    )


@pytest.fixture
def package_logger():
    """The package logger, with handlers and levels restored afterwards."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    loader_logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.loader")
    handlers, level = list(logger.handlers), logger.level
    loader_level = loader_logger.level
    yield logger
    logger.handlers[:] = handlers
    logger.setLevel(level)
    loader_logger.setLevel(loader_level)
