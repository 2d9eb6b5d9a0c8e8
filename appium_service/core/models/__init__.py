"""
Pydantic models for appium_service.

All models use Pydantic v2; launch descriptors are immutable.
"""

from .base import AppiumBaseModel, ImmutableModel
from .config import (
    DEFAULT_APPIUM_PORT,
    DEFAULT_STARTUP_TIMEOUT,
    LoggingConfig,
    PathsConfig,
    ServerConfig,
)
from .launch import LaunchDescriptor, TimeUnit

__all__ = [
    "DEFAULT_APPIUM_PORT",
    "DEFAULT_STARTUP_TIMEOUT",
    "AppiumBaseModel",
    "ImmutableModel",
    "LaunchDescriptor",
    "LoggingConfig",
    "PathsConfig",
    "ServerConfig",
    "TimeUnit",
]
