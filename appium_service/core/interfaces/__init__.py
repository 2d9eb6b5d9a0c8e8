"""
Interface definitions for appium_service's injectable capabilities.

The builder depends on these contracts only, so runners, launchers and
loggers can be swapped out (in tests or by embedding applications).
"""

from .command import ICommandHandle, ICommandRunner
from .launcher import IRunningService, IServiceLauncher
from .logger import ILogger

__all__ = [
    "ICommandHandle",
    "ICommandRunner",
    "ILogger",
    "IRunningService",
    "IServiceLauncher",
]
