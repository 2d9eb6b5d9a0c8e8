"""
Command execution interface definitions.

The builder runs short-lived helper commands to ask the host where Node.js
and the global npm packages live. Runners are injected so resolution can be
tested without spawning processes.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class ICommandHandle(ABC):
    """
    Handle to a helper command that has run to completion.

    The handle must be destroyed once its output has been read.
    """

    @property
    @abstractmethod
    def command(self) -> list[str]:
        """The command line that was executed."""
        pass

    @property
    @abstractmethod
    def stdout(self) -> str:
        """Captured standard output."""
        pass

    @abstractmethod
    def destroy(self) -> None:
        """
        Release the underlying process.

        Kills the process if it is still alive and closes its pipes.
        Safe to call more than once.
        """
        pass


class ICommandRunner(ABC):
    """Interface for running helper commands."""

    @abstractmethod
    def run(self, command: str, args: Sequence[str] = ()) -> ICommandHandle:
        """
        Run a command to completion, capturing its standard output.

        Args:
            command: Executable name or path
            args: Command arguments

        Returns:
            Handle exposing the captured output

        Raises:
            OSError: If the command cannot be started
            subprocess.SubprocessError: If execution fails
        """
        pass
