"""
Core infrastructure for appium_service.

This package provides:
- ServiceContainer: DI container using dependency-injector
- Application bootstrap for initialization
- Interface definitions for injectable capabilities
- Host environment capability and address validation
- Custom exception hierarchy
"""

from .address import DEFAULT_LOCAL_IP_ADDRESS, is_valid_address, validate_address
from .bootstrap import bootstrap, is_initialized, reset
from .container import ServiceContainer, get_container, resolve, try_resolve
from .environment import APPIUM_PATH, NODE_PATH, HostEnvironment
from .exceptions import (
    AppiumExecutionError,
    AppiumNotFoundError,
    AppiumServiceException,
    ExecutionError,
    InvalidArgumentError,
    InvalidInstanceError,
    InvalidNodeJSInstanceError,
    InvalidServerInstanceError,
    NodeJSExecutionError,
    NodeJSNotFoundError,
    NotFoundError,
    ServiceStartupError,
)

__all__ = [
    "APPIUM_PATH",
    "DEFAULT_LOCAL_IP_ADDRESS",
    "NODE_PATH",
    "AppiumExecutionError",
    "AppiumNotFoundError",
    "AppiumServiceException",
    "ExecutionError",
    "HostEnvironment",
    "InvalidArgumentError",
    "InvalidInstanceError",
    "InvalidNodeJSInstanceError",
    "InvalidServerInstanceError",
    "NodeJSExecutionError",
    "NodeJSNotFoundError",
    "NotFoundError",
    "ServiceContainer",
    "ServiceStartupError",
    "bootstrap",
    "get_container",
    "is_initialized",
    "is_valid_address",
    "reset",
    "resolve",
    "try_resolve",
    "validate_address",
]
