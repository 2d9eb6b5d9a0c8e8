"""
Appium server command line flags.

Known flags are grouped by platform. Builders accept any ServerArgument
member or a raw flag string, so flags missing here can still be passed.
"""

from __future__ import annotations

from enum import Enum


class ServerArgument(Enum):
    """Base for server flag enums."""

    @property
    def argument(self) -> str:
        """The flag as typed on the command line."""
        return self.value


class GeneralServerFlag(ServerArgument):
    """Flags understood regardless of the automated platform."""

    SHELL = "--shell"
    CALLBACK_ADDRESS = "--callback-address"
    CALLBACK_PORT = "--callback-port"
    SESSION_OVERRIDE = "--session-override"
    PRE_LAUNCH = "--pre-launch"
    LOG_LEVEL = "--log-level"
    LOG_TIMESTAMP = "--log-timestamp"
    LOCAL_TIMEZONE = "--local-timezone"
    LOG_NO_COLORS = "--log-no-colors"
    WEB_HOOK = "--webhook"
    CONFIGURATION_FILE = "--nodeconfig"
    ROBOT_ADDRESS = "--robot-address"
    ROBOT_PORT = "--robot-port"
    SHOW_CONFIG = "--show-config"
    NO_PERMS_CHECK = "--no-perms-check"
    STRICT_CAPS = "--strict-caps"
    TEMP_DIRECTORY = "--tmp"
    DEBUG_LOG_SPACING = "--debug-log-spacing"
    ASYNC_TRACE = "--async-trace"
    RELAXED_SECURITY = "--relaxed-security"
    DEFAULT_CAPABILITIES = "--default-capabilities"
    ALLOW_INSECURE = "--allow-insecure"
    DENY_INSECURE = "--deny-insecure"


class AndroidServerFlag(ServerArgument):
    """Android-only flags."""

    BOOTSTRAP_PORT_NUMBER = "--bootstrap-port"
    SELENDROID_PORT = "--selendroid-port"
    CHROME_DRIVER_PORT = "--chromedriver-port"
    CHROME_DRIVER_EXECUTABLE = "--chromedriver-executable"
    SUPPRESS_ADB_KILL_SERVER = "--suppress-adb-kill-server"
    REBOOT = "--reboot"


class IOSServerFlag(ServerArgument):
    """iOS-only flags."""

    LOCALIZABLE_STRINGS_DIR = "--localizable-strings-dir"
    TRACE_DIRECTORY = "--trace-dir"
    BACK_END_RETRIES = "--backend-retries"
    WEBKIT_DEBUG_PROXY_PORT = "--webkit-debug-proxy-port"
    IPA_ABSOLUTE_PATH = "--ipa"


def flag_name(argument: ServerArgument | str) -> str:
    """Return the command line spelling of a flag."""
    if isinstance(argument, ServerArgument):
        return argument.argument
    return argument


def normalize_flag(name: str) -> str:
    """Prefix a bare flag name with "--"; names already starting with "-" are kept."""
    name = name.strip()
    if name and not name.startswith("-"):
        return f"--{name}"
    return name
