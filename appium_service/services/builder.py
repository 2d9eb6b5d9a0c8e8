"""
Appium server launch configuration.

AppiumServiceBuilder resolves the Node.js executable and the Appium entry
script, validates the bind address and assembles the server command line.
The resulting LaunchDescriptor is handed to an IServiceLauncher; the builder
itself never starts the server.

Usage:
    with AppiumServiceBuilder() as builder:
        service = (
            builder.using_port(4723)
            .with_argument(GeneralServerFlag.RELAXED_SECURITY)
            .build()
        )
    service.start()
"""

from __future__ import annotations

import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from ..core.address import DEFAULT_LOCAL_IP_ADDRESS, validate_address
from ..core.di import resolve_or_default
from ..core.environment import APPIUM_PATH, NODE_PATH, HostEnvironment
from ..core.exceptions import (
    AppiumExecutionError,
    AppiumNotFoundError,
    ExecutionError,
    InvalidArgumentError,
    InvalidNodeJSInstanceError,
    InvalidServerInstanceError,
    NodeJSExecutionError,
    NodeJSNotFoundError,
)
from ..core.interfaces.command import ICommandHandle, ICommandRunner
from ..core.interfaces.launcher import IRunningService, IServiceLauncher
from ..core.interfaces.logger import ILogger
from ..core.models.config import DEFAULT_APPIUM_PORT, DEFAULT_STARTUP_TIMEOUT
from ..core.models.launch import LaunchDescriptor, TimeUnit
from ..flags import ServerArgument, flag_name, normalize_flag
from ..utils.net import find_free_port
from .scripts import HelperScript, dispose_script

if TYPE_CHECKING:
    from ..core.settings import AppiumServiceSettings

APPIUM_FOLDER = "appium"

# Entry script location inside the appium package, server <= 1.4.x
APPIUM_NODE_MASK_OLD = Path("bin") / "appium.js"
# Entry script location inside the appium package, server >= 1.5.x
APPIUM_NODE_MASK = Path("build") / "lib" / "main.js"

ERROR_NODE_NOT_FOUND = (
    "There is no installed nodes! Please install node via NPM "
    "(https://www.npmjs.com/package/appium#using-node-js) or download and "
    "install Appium app (http://appium.io/downloads.html)"
)

BASH = "bash"
CMD_EXE = "cmd.exe"
NODE = "node"


class AppiumServiceBuilder:
    """
    Builder for local Appium server launches.

    Setters return the builder so calls can be chained. Helper scripts
    materialized during resolution are kept for the builder's lifetime and
    removed by close() (or on leaving a with block).
    """

    def __init__(
        self,
        host: HostEnvironment | None = None,
        runner: ICommandRunner | None = None,
        launcher: IServiceLauncher | None = None,
        logger: ILogger | None = None,
    ) -> None:
        """
        Initialize the builder.

        Args:
            host: Host environment (default: the running process)
            runner: Helper command runner (default: from container, else subprocess)
            launcher: Server launcher (default: from container, else local subprocess)
            logger: Diagnostics logger (default: from container, else no-op)
        """
        self._host = host
        self._runner = runner
        self._launcher = launcher
        self._logger = logger

        self.server_arguments: dict[str, str | None] = {}
        self._node_executable: Path | None = None
        self._appium_js: Path | None = None
        self._ip_address: str | None = DEFAULT_LOCAL_IP_ADDRESS
        self._port = DEFAULT_APPIUM_PORT
        self._log_file: Path | None = None
        self._environment: dict[str, str] = {}

        # The first start is slow on some environments
        self._startup_timeout: float = DEFAULT_STARTUP_TIMEOUT
        self._time_unit = TimeUnit.SECONDS

        self._npm_script: Path | None = None
        self._node_js_executable_script: Path | None = None

    @classmethod
    def from_settings(
        cls,
        settings: AppiumServiceSettings,
        *,
        host: HostEnvironment | None = None,
        runner: ICommandRunner | None = None,
        launcher: IServiceLauncher | None = None,
        logger: ILogger | None = None,
    ) -> AppiumServiceBuilder:
        """
        Create a builder preconfigured from settings.

        Path overrides from settings become host properties, so they take
        precedence over NODE_BINARY_PATH / APPIUM_BINARY_PATH in the
        OS environment. Flag names from settings get a leading "--"
        when they have no dashes, as on the command line.
        """
        if host is None:
            host = HostEnvironment.current(settings.host_properties())
        builder = cls(host=host, runner=runner, launcher=launcher, logger=logger)

        server = settings.server
        builder.using_port(server.port).with_ip_address(server.address)
        builder.with_startup_timeout(server.startup_timeout, TimeUnit.SECONDS)
        if server.log_file:
            builder.with_log_file(Path(server.log_file))
        if settings.env:
            builder.with_environment(settings.env)
        for argument, value in settings.args.items():
            builder.with_argument(normalize_flag(argument), value)
        return builder

    # -------------------------------------------------------------------------
    # Collaborators
    # -------------------------------------------------------------------------

    @property
    def host(self) -> HostEnvironment:
        if self._host is None:
            self._host = HostEnvironment.current()
        return self._host

    @property
    def runner(self) -> ICommandRunner:
        """Get runner, resolving from container or creating a subprocess runner."""
        if self._runner is None:
            from .command_runner import SubprocessCommandRunner

            self._runner = resolve_or_default(ICommandRunner, SubprocessCommandRunner)  # type: ignore[type-abstract]
        return self._runner

    @property
    def launcher(self) -> IServiceLauncher:
        """Get launcher, resolving from container or creating a local launcher."""
        if self._launcher is None:
            from .launcher import LocalServiceLauncher

            self._launcher = resolve_or_default(IServiceLauncher, LocalServiceLauncher)  # type: ignore[type-abstract]
        return self._launcher

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from .logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    # -------------------------------------------------------------------------
    # Configured values
    # -------------------------------------------------------------------------

    @property
    def port(self) -> int:
        return self._port

    @property
    def ip_address(self) -> str | None:
        return self._ip_address

    @property
    def log_file(self) -> Path | None:
        return self._log_file

    @property
    def environment(self) -> dict[str, str]:
        return dict(self._environment)

    @property
    def startup_timeout(self) -> tuple[float, TimeUnit]:
        """Configured startup timeout as a (time, unit) pair."""
        return self._startup_timeout, self._time_unit

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def using_driver_executable(self, node_executable: Path | str) -> AppiumServiceBuilder:
        """Set which Node.js executable to use. Existence is checked on build()."""
        self._node_executable = Path(node_executable)
        return self

    def using_port(self, port: int) -> AppiumServiceBuilder:
        """
        Set the server port. 0 means any free port, picked on build().

        Raises:
            InvalidArgumentError: If port is negative
        """
        if port < 0:
            raise InvalidArgumentError("Port number may not be negative", argument="port", value=port)
        self._port = port
        return self

    def using_any_free_port(self) -> AppiumServiceBuilder:
        """Start the server on a port that is free right now."""
        self._port = find_free_port()
        return self

    def with_environment(self, environment: Mapping[str, str]) -> AppiumServiceBuilder:
        """Replace the extra environment variables for the server process."""
        self._environment = dict(environment)
        return self

    def with_log_file(self, log_file: Path | str) -> AppiumServiceBuilder:
        """Make the server write its log to the given file."""
        self._log_file = Path(log_file)
        return self

    def with_appium_js(self, appium_js: Path | str) -> AppiumServiceBuilder:
        """Set the Appium entry script explicitly."""
        self._appium_js = Path(appium_js)
        return self

    def with_ip_address(self, ip_address: str | None) -> AppiumServiceBuilder:
        """Set the bind address. Validated when arguments are assembled."""
        self._ip_address = ip_address
        return self

    def with_startup_timeout(self, time: float, unit: TimeUnit | None) -> AppiumServiceBuilder:
        """
        Set how long the launcher waits for the server to come up.

        Raises:
            InvalidArgumentError: If unit is None or time is not positive
        """
        if unit is None:
            raise InvalidArgumentError("Time unit should not be None", argument="unit")
        if time <= 0:
            raise InvalidArgumentError(
                "Time value should be greater than zero", argument="time", value=time
            )
        self._startup_timeout = time
        self._time_unit = unit
        return self

    def with_argument(
        self, argument: ServerArgument | str, value: str | None = ""
    ) -> AppiumServiceBuilder:
        """
        Register a server flag.

        Boolean flags are signalled by their presence alone, so they are
        stored with an empty value; that is what calling this without a
        value does. Registering a flag again replaces its value.

        Args:
            argument: Flag enum member or raw flag string
            value: Flag value, "" for boolean flags
        """
        self.server_arguments[flag_name(argument)] = value
        return self

    # -------------------------------------------------------------------------
    # Resolution
    # -------------------------------------------------------------------------

    def _setup_npm_script(self) -> None:
        if self._npm_script is not None:
            return
        if not self.host.is_windows:
            self._npm_script = HelperScript.GET_PATH_TO_DEFAULT_NODE_UNIX.materialize()

    def _setup_node_js_executable_script(self) -> None:
        if self._node_js_executable_script is not None:
            return
        self._node_js_executable_script = HelperScript.GET_NODE_JS_EXECUTABLE.materialize()

    def _run_helper(
        self,
        command: str,
        args: Sequence[str],
        error_cls: type[ExecutionError],
        message: str,
    ) -> ICommandHandle:
        self.logger.debug("Running helper: %s %s", command, " ".join(args))
        try:
            return self.runner.run(command, args)
        except (OSError, subprocess.SubprocessError) as e:
            raise error_cls(message, command=[command, *args]) from e

    def find_default_executable(self) -> Path:
        """
        Locate the Node.js executable.

        Checks NODE_BINARY_PATH first, then asks node itself for its path.

        Raises:
            NodeJSExecutionError: If node could not be run
            NodeJSNotFoundError: If node reported no usable path
        """
        node_path = self.host.lookup(NODE_PATH)
        if node_path:
            candidate = Path(node_path)
            if candidate.exists():
                self.logger.debug("Using Node.js from %s: %s", NODE_PATH, candidate)
                return candidate
            self.logger.debug("%s points to missing file %s", NODE_PATH, candidate)

        self._setup_node_js_executable_script()
        command = f"{NODE}.exe" if self.host.is_windows else NODE
        handle = self._run_helper(
            command,
            [str(self._node_js_executable_script)],
            NodeJSExecutionError,
            "Node.js is not installed!",
        )
        try:
            output = handle.stdout
            file_path = output.strip()
            if not file_path or not Path(file_path).exists():
                raise NodeJSNotFoundError(
                    "Can't get a path to the default Node.js instance",
                    context={"output": output},
                ) from FileNotFoundError(output)
            self.logger.debug("Default Node.js instance: %s", file_path)
            return Path(file_path)
        finally:
            handle.destroy()

    @staticmethod
    def _validate_node_structure(node: Path) -> None:
        absolute_node_path = str(node.absolute())
        if not node.exists():
            raise InvalidServerInstanceError(
                f"The invalid appium node {absolute_node_path} has been defined",
                path=absolute_node_path,
            ) from FileNotFoundError(f"The node {absolute_node_path} doesn't exist")

    def _find_node_in_current_file_system(self) -> Path:
        self._setup_npm_script()

        if self.host.is_windows:
            command, args = CMD_EXE, ["/C", "npm root -g"]
        else:
            command, args = BASH, ["-l", str(self._npm_script)]

        handle = self._run_helper(
            command, args, AppiumExecutionError, "Unable to query the global npm root"
        )
        searched = {
            "layouts": f"{APPIUM_NODE_MASK_OLD.as_posix()}, {APPIUM_NODE_MASK.as_posix()}",
        }
        try:
            output = handle.stdout
            instance_path = output.strip()
            default_appium_node = Path(instance_path) / APPIUM_FOLDER if instance_path else None
            if default_appium_node is None or not default_appium_node.exists():
                raise AppiumNotFoundError(
                    ERROR_NODE_NOT_FOUND,
                    context={**searched, "output": output},
                ) from FileNotFoundError(output)

            old_result = default_appium_node / APPIUM_NODE_MASK_OLD
            if old_result.exists():
                return old_result

            new_result = default_appium_node / APPIUM_NODE_MASK
            if new_result.exists():
                return new_result

            raise AppiumNotFoundError(
                ERROR_NODE_NOT_FOUND,
                context={**searched, "directory": str(default_appium_node)},
            ) from FileNotFoundError(
                f"Could not find file neither {APPIUM_NODE_MASK_OLD.as_posix()} "
                f"nor {APPIUM_NODE_MASK.as_posix()} in the {default_appium_node} directory"
            )
        finally:
            handle.destroy()

    def check_appium_js(self) -> Path:
        """
        Resolve and validate the Appium entry script.

        Order: explicit with_appium_js() path, APPIUM_BINARY_PATH, then the
        global npm root.

        Raises:
            InvalidServerInstanceError: If a configured path does not exist
            AppiumNotFoundError: If the npm root holds no Appium entry script
            AppiumExecutionError: If the npm root could not be queried
        """
        if self._appium_js is not None:
            self._validate_node_structure(self._appium_js)
            return self._appium_js

        appium_js = self.host.lookup(APPIUM_PATH)
        if appium_js:
            node = Path(appium_js)
            self._validate_node_structure(node)
            self._appium_js = node
            return node

        self._appium_js = self._find_node_in_current_file_system()
        self.logger.debug("Found Appium entry script: %s", self._appium_js)
        return self._appium_js

    def create_args(self) -> tuple[str, ...]:
        """
        Assemble the server arguments.

        Returns:
            Entry script, --port, --address, optional --log, then the
            registered flags

        Raises:
            InvalidArgumentError: If the bind address is invalid
        """
        appium_js = self.check_appium_js()
        args = [str(appium_js.absolute()), "--port", str(self._port)]

        self._ip_address = validate_address(self._ip_address)
        args += ["--address", self._ip_address]

        if self._log_file is not None:
            args += ["--log", str(self._log_file.absolute())]

        for argument, value in self.server_arguments.items():
            if not argument or not argument.strip() or value is None:
                continue
            args.append(argument)
            if value.strip():
                args.append(value)

        return tuple(args)

    def build_descriptor(self) -> LaunchDescriptor:
        """
        Resolve everything needed to launch the server.

        Raises:
            InvalidNodeJSInstanceError: If the configured Node.js does not exist
            AppiumServiceException: Any resolution error from the steps above
        """
        executable = self._node_executable
        if executable is None:
            executable = self.find_default_executable()
        elif not executable.exists():
            absolute = str(executable.absolute())
            raise InvalidNodeJSInstanceError(
                f"The invalid Node.js executable {absolute} has been defined",
                path=absolute,
            )

        if self._port == 0:
            self._port = find_free_port()

        arguments = self.create_args()
        descriptor = LaunchDescriptor(
            executable=executable,
            address=self._ip_address or DEFAULT_LOCAL_IP_ADDRESS,
            port=self._port,
            arguments=arguments,
            environment=dict(self._environment),
            startup_timeout=float(self._time_unit.to_seconds(self._startup_timeout)),
        )
        self.logger.debug("Launch descriptor: %s", descriptor.command)
        return descriptor

    def build(self, launcher: IServiceLauncher | None = None) -> IRunningService:
        """
        Build the service handle.

        Args:
            launcher: Launcher to use instead of the builder's own

        Returns:
            Service handle, not yet started
        """
        descriptor = self.build_descriptor()
        return (launcher or self.launcher).launch(descriptor)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Delete the helper scripts materialized by this builder."""
        for script in (self._npm_script, self._node_js_executable_script):
            if script is not None and not dispose_script(script):
                self.logger.debug("Could not delete helper script %s", script)
        self._npm_script = None
        self._node_js_executable_script = None

    def __enter__(self) -> AppiumServiceBuilder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
