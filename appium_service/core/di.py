"""
Dependency injection helpers for appium_service.

Lazy resolution patterns that fall back to default implementations when the
container has not been bootstrapped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from .container import get_container

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_or_default(
    interface: type[T],
    default_factory: Callable[[], T],
) -> T:
    """Resolve a service from the container or create a default.

    Args:
        interface: The interface type to resolve
        default_factory: Callable that creates the default implementation

    Returns:
        Resolved service instance or default

    Example:
        >>> from appium_service.core.interfaces.logger import ILogger
        >>> from appium_service.services.logging import NullLogger
        >>> logger = resolve_or_default(ILogger, NullLogger)
    """
    instance = get_container().try_resolve(interface)
    if instance is not None:
        return instance
    return default_factory()
