"""
Services for resolving and launching a local Appium server.
"""

from .builder import AppiumServiceBuilder
from .command_runner import CommandLine, SubprocessCommandRunner
from .launcher import AppiumDriverLocalService, LocalServiceLauncher
from .logging import AppiumLogger, NullLogger
from .scripts import HelperScript

__all__ = [
    "AppiumDriverLocalService",
    "AppiumLogger",
    "AppiumServiceBuilder",
    "CommandLine",
    "HelperScript",
    "LocalServiceLauncher",
    "NullLogger",
    "SubprocessCommandRunner",
]
