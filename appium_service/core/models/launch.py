"""
Launch models.

The builder resolves everything into a LaunchDescriptor; launchers only
ever see this value object.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import Field

from .base import ImmutableModel


class TimeUnit(Enum):
    """Unit for the server startup timeout."""

    MILLISECONDS = 0.001
    SECONDS = 1.0
    MINUTES = 60.0
    HOURS = 3600.0

    def to_seconds(self, value: float) -> float:
        """Convert a value expressed in this unit to seconds."""
        return value * self.value


class LaunchDescriptor(ImmutableModel):
    """Everything a launcher needs to start the server process.

    Attributes:
        executable: Node.js executable
        address: Address the server binds to
        port: Port the server listens on
        arguments: Ordered server arguments (entry script first)
        environment: Extra environment variables for the server process
        startup_timeout: Seconds to wait for the server to accept connections
    """

    executable: Path
    address: str
    port: int = Field(ge=0)
    arguments: tuple[str, ...]
    environment: dict[str, str] = Field(default_factory=dict)
    startup_timeout: float = Field(gt=0)

    @property
    def command(self) -> list[str]:
        """Full command line: executable followed by arguments."""
        return [str(self.executable), *self.arguments]
