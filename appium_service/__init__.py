"""
appium_service - configure and launch a local Appium server.

Resolves the Node.js executable and the Appium entry script on the host,
assembles the server command line and starts the server for test clients.
"""

from .core.models.launch import LaunchDescriptor, TimeUnit
from .flags import AndroidServerFlag, GeneralServerFlag, IOSServerFlag, ServerArgument
from .services.builder import AppiumServiceBuilder

__all__ = [
    "AndroidServerFlag",
    "AppiumServiceBuilder",
    "GeneralServerFlag",
    "IOSServerFlag",
    "LaunchDescriptor",
    "ServerArgument",
    "TimeUnit",
]
