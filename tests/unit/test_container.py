"""
Unit tests for the service container and bootstrap.
"""

from unittest.mock import patch

import pytest
from dependency_injector import providers

from appium_service.core.bootstrap import bootstrap, is_initialized
from appium_service.core.container import ServiceContainer, get_container
from appium_service.core.di import resolve_or_default
from appium_service.core.interfaces.command import ICommandRunner
from appium_service.core.interfaces.launcher import IServiceLauncher
from appium_service.core.interfaces.logger import ILogger
from appium_service.core.settings import AppiumServiceSettings
from appium_service.services.command_runner import SubprocessCommandRunner
from appium_service.services.launcher import LocalServiceLauncher
from appium_service.services.logging import NullLogger


class TestServiceContainer:
    def test_singleton_factory_called_once(self):
        container = ServiceContainer()
        calls = []

        def factory():
            calls.append(1)
            return NullLogger()

        container.register_singleton(ILogger, factory=factory)

        assert container.resolve(ILogger) is container.resolve(ILogger)
        assert len(calls) == 1

    def test_transient_creates_new_instances(self):
        container = ServiceContainer()
        container.register_transient(ICommandRunner, SubprocessCommandRunner)

        assert container.resolve(ICommandRunner) is not container.resolve(ICommandRunner)

    def test_register_singleton_requires_something(self):
        with pytest.raises(ValueError):
            ServiceContainer().register_singleton(ILogger)

    def test_resolve_unregistered(self):
        container = ServiceContainer()

        with pytest.raises(KeyError):
            container.resolve(ILogger)
        assert container.try_resolve(ILogger) is None
        assert not container.is_registered(ILogger)

    def test_override(self):
        container = ServiceContainer()
        container.register_class(ILogger, NullLogger)
        replacement = NullLogger()

        container.override(ILogger, providers.Object(replacement))

        assert container.resolve(ILogger) is replacement

    def test_global_instance_reset(self):
        first = get_container()
        ServiceContainer.reset()

        assert get_container() is not first


class TestResolveOrDefault:
    def test_default_when_unregistered(self):
        assert isinstance(resolve_or_default(ILogger, NullLogger), NullLogger)

    def test_registered_instance_wins(self):
        logger = NullLogger()
        get_container().register_singleton(ILogger, implementation=logger)

        assert resolve_or_default(ILogger, lambda: pytest.fail("default used")) is logger


class TestBootstrap:
    def test_registers_core_services(self):
        settings = AppiumServiceSettings(logging={"file": False})

        container = bootstrap(settings)

        assert is_initialized()
        assert isinstance(container.resolve(ICommandRunner), SubprocessCommandRunner)
        assert isinstance(container.resolve(IServiceLauncher), LocalServiceLauncher)
        assert isinstance(container.resolve(ILogger), ILogger)

    def test_logger_writes_to_configured_path(self, tmp_path):
        log_file = tmp_path / "diag" / "appium-service.log"
        settings = AppiumServiceSettings(logging={"level": "debug", "path": str(log_file)})

        logger = bootstrap(settings).resolve(ILogger)
        try:
            logger.debug("Resolved node at %s", "/usr/bin/node")
        finally:
            for handler in list(logger._logger.handlers):
                handler.close()
                logger._logger.removeHandler(handler)

        assert "Resolved node at /usr/bin/node" in log_file.read_text()

    def test_second_call_is_noop(self):
        settings = AppiumServiceSettings(logging={"file": False})
        container = bootstrap(settings)
        logger = container.resolve(ILogger)

        with patch("appium_service.core.bootstrap._register_core_services") as register:
            assert bootstrap(settings) is container

        register.assert_not_called()
        assert container.resolve(ILogger) is logger
