"""
Local subprocess launcher.

Starts the Appium server as a child process and waits until its port
accepts TCP connections.
"""

from __future__ import annotations

import os
import subprocess
import time
from typing import IO

from ..core.di import resolve_or_default
from ..core.exceptions import ServiceStartupError
from ..core.interfaces.launcher import IRunningService, IServiceLauncher
from ..core.interfaces.logger import ILogger
from ..core.models.launch import LaunchDescriptor
from ..utils.net import connectable_host, format_host, is_port_open


class AppiumDriverLocalService(IRunningService):
    """
    Appium server running as a local child process.

    Usage:
        service = AppiumDriverLocalService(descriptor)
        with service:
            driver = webdriver.Remote(service.url, options=options)
    """

    def __init__(
        self,
        descriptor: LaunchDescriptor,
        logger: ILogger | None = None,
        output: IO[bytes] | int | None = subprocess.DEVNULL,
        poll_interval: float = 0.5,
        stop_timeout: float = 10.0,
    ) -> None:
        self.descriptor = descriptor
        self._logger = logger
        self._output = output
        self._poll_interval = poll_interval
        self._stop_timeout = stop_timeout
        self._process: subprocess.Popen[bytes] | None = None

    @property
    def logger(self) -> ILogger:
        """Get logger, resolving from container or creating NullLogger."""
        if self._logger is None:
            from .logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    @property
    def host(self) -> str:
        return connectable_host(self.descriptor.address)

    @property
    def url(self) -> str:
        return f"http://{format_host(self.host)}:{self.descriptor.port}/wd/hub"

    @property
    def pid(self) -> int | None:
        return self._process.pid if self._process else None

    def is_running(self) -> bool:
        return self._process is not None and self._process.poll() is None

    def start(self) -> None:
        if self.is_running():
            return

        env = {**os.environ, **self.descriptor.environment}
        self.logger.info("Starting Appium server: %s", " ".join(self.descriptor.command))
        try:
            self._process = subprocess.Popen(
                self.descriptor.command,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=self._output,
                stderr=subprocess.STDOUT,
            )
        except OSError as e:
            raise ServiceStartupError("Unable to start the Appium server", url=self.url) from e

        try:
            if self._wait_until_listening():
                return
        except BaseException:
            # Includes KeyboardInterrupt
            self.stop()
            raise

        self.stop()
        raise ServiceStartupError(
            f"The Appium server has not started within {self.descriptor.startup_timeout:g} seconds",
            url=self.url,
        )

    def _wait_until_listening(self) -> bool:
        """Poll until the port opens (True) or the startup timeout passes (False)."""
        assert self._process is not None
        deadline = time.monotonic() + self.descriptor.startup_timeout
        while time.monotonic() < deadline:
            returncode = self._process.poll()
            if returncode is not None:
                self._process = None
                raise ServiceStartupError(
                    f"The Appium server exited with code {returncode} before accepting connections",
                    url=self.url,
                )
            if is_port_open(self.host, self.descriptor.port):
                self.logger.info("Appium server is listening at %s", self.url)
                return True
            time.sleep(self._poll_interval)
        return False

    def stop(self) -> None:
        process = self._process
        if process is None:
            return
        if process.poll() is None:
            self.logger.info("Stopping Appium server (pid %s)", process.pid)
            process.terminate()
            try:
                process.wait(timeout=self._stop_timeout)
            except subprocess.TimeoutExpired:
                self.logger.warning("Appium server did not exit, killing pid %s", process.pid)
                process.kill()
                process.wait()
        self._process = None


class LocalServiceLauncher(IServiceLauncher):
    """Launches the server as a child of the current process."""

    def __init__(
        self,
        logger: ILogger | None = None,
        poll_interval: float = 0.5,
        stop_timeout: float = 10.0,
    ) -> None:
        self._logger = logger
        self._poll_interval = poll_interval
        self._stop_timeout = stop_timeout

    def launch(self, descriptor: LaunchDescriptor) -> AppiumDriverLocalService:
        return AppiumDriverLocalService(
            descriptor,
            logger=self._logger,
            poll_interval=self._poll_interval,
            stop_timeout=self._stop_timeout,
        )
