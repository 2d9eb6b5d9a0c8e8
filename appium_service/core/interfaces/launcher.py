"""
Launcher interface definitions.

A launcher turns a LaunchDescriptor into a running server. The builder never
spawns the server itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models.launch import LaunchDescriptor


class IRunningService(ABC):
    """Handle to a (possibly not yet started) server process."""

    @property
    @abstractmethod
    def url(self) -> str:
        """Base URL clients connect to."""
        pass

    @abstractmethod
    def start(self) -> None:
        """
        Start the server and wait until it accepts connections.

        Raises:
            ServiceStartupError: If the server does not come up in time
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop the server. No-op when it is not running."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Whether the server process is alive."""
        pass

    def __enter__(self) -> IRunningService:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class IServiceLauncher(ABC):
    """Interface for turning launch descriptors into running services."""

    @abstractmethod
    def launch(self, descriptor: LaunchDescriptor) -> IRunningService:
        """
        Create a service handle for the descriptor.

        Args:
            descriptor: Resolved executable, arguments and environment

        Returns:
            Service handle; call start() on it to spawn the server

        Raises:
            ServiceStartupError: If the service cannot be created
        """
        pass
