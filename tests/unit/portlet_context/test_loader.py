"""
Tests for the root application context loader.
"""

import gc
import logging
import weakref
from unittest.mock import MagicMock

import pytest

from portlet_context.config import LoaderSettings
from portlet_context.exceptions import ContextStartupError, ContextTypeError
from portlet_context.keys import ROOT_ATTRIBUTE, ROOT_LOADER_ATTRIBUTE
from portlet_context.loader import ContextLoader, default_context_factory
from portlet_context.logging_utils import configure_logging
from portlet_context.types import StaticApplicationContext
from portlet_context.utils import (
    get_application_context,
    get_context_loader,
    get_required_application_context,
)


class TestContextLoaderInit:
    """Tests for init_application_context."""

    def test_publishes_context_and_loader(self, container, app_context):
        loader = ContextLoader(lambda c, s: app_context)

        result = loader.init_application_context(container)

        assert result is app_context
        assert loader.current_context is app_context
        assert get_required_application_context(container) is app_context
        assert get_context_loader(container) is loader

    def test_factory_receives_container_and_settings(self, container, app_context):
        factory = MagicMock(return_value=app_context)
        settings = LoaderSettings(context_id="portal")
        loader = ContextLoader(factory, settings)

        loader.init_application_context(container)

        factory.assert_called_once_with(container, settings)

    def test_default_factory_uses_context_id(self, container):
        loader = ContextLoader(settings=LoaderSettings(context_id="portal"))

        ctx = loader.init_application_context(container)

        assert isinstance(ctx, StaticApplicationContext)
        assert ctx.id == "portal"

    def test_default_context_factory(self, container):
        ctx = default_context_factory(container, LoaderSettings())

        assert isinstance(ctx, StaticApplicationContext)

    def test_custom_attribute_names(self, container, app_context):
        settings = LoaderSettings(context_attribute="ctx", loader_attribute="ldr")
        loader = ContextLoader(lambda c, s: app_context, settings)

        loader.init_application_context(container)

        assert get_application_context(container, "ctx") is app_context
        assert container.get_attribute("ldr") is loader
        assert get_application_context(container) is None

    def test_second_init_is_rejected(self, container, app_context):
        ContextLoader(lambda c, s: app_context).init_application_context(container)

        with pytest.raises(ContextStartupError, match="already a root application context"):
            ContextLoader(lambda c, s: app_context).init_application_context(container)

    def test_runtime_failure_is_published_unchanged(self, container):
        failure = RuntimeError("boom")

        def factory(c, s):
            raise failure

        with pytest.raises(RuntimeError):
            ContextLoader(factory).init_application_context(container)

        with pytest.raises(RuntimeError) as exc_info:
            get_application_context(container)
        assert exc_info.value is failure

    def test_checked_failure_is_published_and_wrapped_on_lookup(self, container):
        failure = FileNotFoundError("context.yaml")

        def factory(c, s):
            raise failure

        with pytest.raises(FileNotFoundError):
            ContextLoader(factory).init_application_context(container)

        with pytest.raises(ContextStartupError) as exc_info:
            get_required_application_context(container)
        assert exc_info.value.cause is failure

    def test_failures_not_published_when_disabled(self, container):
        def factory(c, s):
            raise ValueError("nope")

        loader = ContextLoader(factory, LoaderSettings(publish_failures=False))
        with pytest.raises(ValueError):
            loader.init_application_context(container)

        assert get_application_context(container) is None
        assert loader.current_context is None

    def test_factory_returning_wrong_type(self, container):
        loader = ContextLoader(lambda c, s: "not a context")

        with pytest.raises(ContextTypeError):
            loader.init_application_context(container)

        with pytest.raises(ContextTypeError):
            get_application_context(container)

    def test_logs_initialization(self, container, app_context, caplog):
        loader = ContextLoader(lambda c, s: app_context)

        with caplog.at_level(logging.INFO, logger="portlet_context.loader"):
            loader.init_application_context(container)

        assert "Initializing root application context" in caplog.text
        assert "'test-root' initialized in" in caplog.text

    def test_logs_failure(self, container, caplog):
        def factory(c, s):
            raise RuntimeError("boom")

        with caplog.at_level(logging.ERROR, logger="portlet_context.loader"):
            with pytest.raises(RuntimeError):
                ContextLoader(factory).init_application_context(container)

        assert "Context initialization failed: boom" in caplog.text


class _UncloseableContext:
    id = "uncloseable"
    display_name = "Context without close()"

    def get_bean(self, name):
        raise KeyError(name)

    def contains_bean(self, name):
        return False


class TestContextLoaderClose:
    """Tests for close_application_context."""

    def test_close_unbinds_and_closes(self, container, app_context):
        loader = ContextLoader(lambda c, s: app_context)
        loader.init_application_context(container)

        loader.close_application_context(container)

        assert app_context.closed
        assert loader.current_context is None
        assert container.get_attribute(ROOT_ATTRIBUTE) is None
        assert container.get_attribute(ROOT_LOADER_ATTRIBUTE) is None

    def test_close_is_idempotent(self, container, app_context):
        loader = ContextLoader(lambda c, s: app_context)
        loader.init_application_context(container)

        loader.close_application_context(container)
        loader.close_application_context(container)

        assert len(container) == 0

    def test_close_after_failed_init_clears_failure(self, container):
        def factory(c, s):
            raise RuntimeError("boom")

        loader = ContextLoader(factory)
        with pytest.raises(RuntimeError):
            loader.init_application_context(container)

        loader.close_application_context(container)

        assert get_application_context(container) is None

    def test_close_keeps_foreign_loader(self, container, app_context):
        other = object()
        loader = ContextLoader(lambda c, s: app_context)
        loader.init_application_context(container)
        container.set_attribute(ROOT_LOADER_ATTRIBUTE, other)

        loader.close_application_context(container)

        assert container.get_attribute(ROOT_LOADER_ATTRIBUTE) is other

    def test_context_without_close(self, container):
        ctx = _UncloseableContext()
        loader = ContextLoader(lambda c, s: ctx)
        loader.init_application_context(container)

        loader.close_application_context(container)

        assert container.get_attribute(ROOT_ATTRIBUTE) is None

    def test_reinit_after_close(self, container):
        loader = ContextLoader()
        first = loader.init_application_context(container)
        loader.close_application_context(container)

        second = loader.init_application_context(container)

        assert second is not first
        assert get_required_application_context(container) is second


class _Resource:
    pass


class TestContextLoaderFailureFrames:
    """A published failure does not keep the factory's locals alive."""

    def test_factory_locals_released(self, container):
        refs = []

        def factory(c, s):
            resource = _Resource()
            refs.append(weakref.ref(resource))
            raise ValueError("nope")

        with pytest.raises(ValueError):
            ContextLoader(factory).init_application_context(container)
        gc.collect()

        assert refs[0]() is None
        with pytest.raises(ContextStartupError):
            get_application_context(container)

    def test_traceback_kept_for_diagnostics(self, container):
        def factory(c, s):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError) as exc_info:
            ContextLoader(factory).init_application_context(container)

        assert exc_info.value.__traceback__ is not None


class TestContextLoaderLogging:
    """The loader follows the host's logging configuration."""

    def test_construction_leaves_logger_levels_alone(self, package_logger):
        loader_logger = logging.getLogger("portlet_context.loader")
        before = loader_logger.level

        ContextLoader(settings=LoaderSettings(log_level="ERROR"))

        assert loader_logger.level == before

    def test_verbose_logging_enables_debug_records(self, container, caplog, package_logger):
        configure_logging(verbose=True)
        loader = ContextLoader()
        loader.init_application_context(container)

        with caplog.at_level(logging.DEBUG):
            loader.close_application_context(container)

        assert any(
            r.levelno == logging.DEBUG
            and r.getMessage().startswith("Closing root application context")
            for r in caplog.records
        )

    def test_settings_level_applied_through_configure_logging(
        self, container, caplog, package_logger
    ):
        settings = LoaderSettings(log_level="WARNING")
        configure_logging(level=settings.log_level)
        loader = ContextLoader(settings=settings)

        with caplog.at_level(logging.DEBUG):
            loader.init_application_context(container)

        assert not any(r.name == "portlet_context.loader" for r in caplog.records)
