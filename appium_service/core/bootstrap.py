"""
Application bootstrap for appium_service.

Initializes the DI container with the default logger, command runner and
launcher. Call once at application startup; library users who never call it
get the same defaults lazily, minus file logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .container import ServiceContainer, get_container
from .interfaces.command import ICommandRunner
from .interfaces.launcher import IServiceLauncher
from .interfaces.logger import ILogger

if TYPE_CHECKING:
    from .settings import AppiumServiceSettings

_initialized = False


def bootstrap(settings: AppiumServiceSettings | None = None) -> ServiceContainer:
    """
    Bootstrap the application.

    Args:
        settings: Loaded settings (default: load from config and environment)

    Returns:
        Initialized ServiceContainer
    """
    global _initialized

    container = get_container()

    if _initialized:
        return container

    if settings is None:
        from .settings import load_settings

        settings = load_settings()

    _register_core_services(container, settings)

    _initialized = True
    return container


def _register_core_services(container: ServiceContainer, settings: AppiumServiceSettings) -> None:
    """Register core application services."""
    from ..services.command_runner import SubprocessCommandRunner
    from ..services.launcher import LocalServiceLauncher
    from ..services.logging import AppiumLogger

    def create_logger() -> ILogger:
        return AppiumLogger(
            level=settings.logging.level,
            console_enabled=settings.logging.console,
            file_enabled=settings.logging.file,
            log_file=Path(settings.logging.path).expanduser() if settings.logging.path else None,
        )

    container.register_singleton(ILogger, factory=create_logger)  # type: ignore[type-abstract]
    container.register_class(ICommandRunner, SubprocessCommandRunner)  # type: ignore[type-abstract]

    def create_launcher() -> IServiceLauncher:
        return LocalServiceLauncher(logger=container.resolve(ILogger))  # type: ignore[type-abstract]

    container.register_singleton(IServiceLauncher, factory=create_launcher)  # type: ignore[type-abstract]


def reset() -> None:
    """
    Reset the application state.

    Useful for testing to ensure clean state between tests.
    """
    global _initialized
    ServiceContainer.reset()
    _initialized = False


def is_initialized() -> bool:
    """Check if the application has been bootstrapped."""
    return _initialized
