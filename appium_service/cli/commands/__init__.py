"""
Click command implementations for the appium-service CLI.

Each module corresponds to one command and is registered with the main
group by register_commands() in appium_service.cli.
"""

from .args import args
from .start import start

COMMANDS = [
    args,
    start,
]

__all__ = [
    "COMMANDS",
    "args",
    "start",
]
