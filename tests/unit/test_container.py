"""Tests for the service container, bootstrap and logger."""

import io
import logging
from unittest.mock import patch

import pytest

from nixrun.core import bootstrap as bootstrap_module
from nixrun.core.container import ServiceContainer, get_container
from nixrun.core.di import resolve_or_default
from nixrun.core.interfaces.logger import ILogger
from nixrun.core.interfaces.presenter import IPresenter
from nixrun.core.interfaces.process import IProcessRunner
from nixrun.presenters.console import ConsolePresenter
from nixrun.services.execution import SubprocessRunner
from nixrun.services.logging import NixrunLogger, NullLogger


class TestServiceContainer:
    def test_singleton_instance(self):
        container = ServiceContainer()
        logger = NullLogger()
        container.register_singleton(ILogger, instance=logger)

        assert container.is_registered(ILogger)
        assert container.try_resolve(ILogger) is logger

    def test_singleton_factory_is_lazy_and_cached(self):
        calls = []

        def factory():
            calls.append(1)
            return NullLogger()

        container = ServiceContainer()
        container.register_singleton(ILogger, factory=factory)
        assert calls == []

        assert container.try_resolve(ILogger) is container.try_resolve(ILogger)
        assert calls == [1]

    def test_register_requires_something(self):
        with pytest.raises(ValueError):
            ServiceContainer().register_singleton(ILogger)

    def test_unregistered(self):
        container = ServiceContainer()

        assert not container.is_registered(ILogger)
        assert container.try_resolve(ILogger) is None

    def test_resolve_or_default(self):
        assert isinstance(resolve_or_default(ILogger, NullLogger), NullLogger)

        logger = NullLogger()
        get_container().register_singleton(ILogger, instance=logger)
        assert resolve_or_default(ILogger, NullLogger) is logger


class TestBootstrap:
    def test_registers_services(self, tmp_path):
        container = bootstrap_module.bootstrap(start_dir=tmp_path)

        assert bootstrap_module.is_initialized()
        assert isinstance(container.try_resolve(IPresenter), ConsolePresenter)
        assert isinstance(container.try_resolve(ILogger), NixrunLogger)
        assert isinstance(container.try_resolve(IProcessRunner), SubprocessRunner)

    def test_uses_given_config_without_reloading(self):
        config = {"logging": {"level": "error", "console": False, "file": False}}

        with patch("nixrun.core.settings.load_config") as load_config:
            container = bootstrap_module.bootstrap(config=config)
            container.try_resolve(ILogger)

        load_config.assert_not_called()
        assert logging.getLogger("nixrun").handlers == []

    def test_keeps_registered_runner(self, tmp_path, registered_runner):
        container = bootstrap_module.bootstrap(start_dir=tmp_path)

        assert container.try_resolve(IProcessRunner) is registered_runner

    def test_second_call_is_noop(self, tmp_path):
        first = bootstrap_module.bootstrap(start_dir=tmp_path)
        logger = first.try_resolve(ILogger)

        assert bootstrap_module.bootstrap(start_dir=tmp_path) is first
        assert first.try_resolve(ILogger) is logger

    def test_reset(self, tmp_path):
        bootstrap_module.bootstrap(start_dir=tmp_path)
        bootstrap_module.reset()

        assert not bootstrap_module.is_initialized()
        assert get_container().try_resolve(ILogger) is None


class TestNixrunLogger:
    def test_console_level_filters(self):
        stream = io.StringIO()
        logger = NixrunLogger(name="nixrun.test.filter", level="info", stream=stream)

        logger.debug("hidden %s", "debug")
        logger.info("Building %s", ".#x")

        assert stream.getvalue() == "Building .#x\n"

    def test_set_level(self):
        stream = io.StringIO()
        logger = NixrunLogger(name="nixrun.test.level", level="warning", stream=stream)

        logger.info("before")
        logger.set_level("debug")
        logger.debug("after")

        assert stream.getvalue() == "after\n"

    def test_reconfigure_replaces_handlers(self):
        first, second = io.StringIO(), io.StringIO()
        NixrunLogger(name="nixrun.test.again", stream=first)
        logger = NixrunLogger(name="nixrun.test.again", stream=second)

        logger.info("once")

        assert first.getvalue() == ""
        assert second.getvalue() == "once\n"

    def test_console_disabled(self):
        logger = NixrunLogger(name="nixrun.test.off", console=False)

        assert logging.getLogger("nixrun.test.off").handlers == []
        logger.error("nowhere")

    def test_file_handler(self, tmp_path, monkeypatch):
        log_path = tmp_path / "logs" / "nixrun.log"
        monkeypatch.setattr(NixrunLogger, "LOG_FILE_PATH", log_path)

        logger = NixrunLogger(name="nixrun.test.file", console=False, to_file=True)
        logger.info("written to disk")
        for handler in logging.getLogger("nixrun.test.file").handlers:
            handler.flush()

        assert "INFO    nixrun.test.file: written to disk" in log_path.read_text()
