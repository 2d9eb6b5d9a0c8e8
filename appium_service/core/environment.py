"""
Host environment capability.

Wraps the process-level state the builder depends on (variable lookups and
platform detection) so that resolution can be exercised against simulated
hosts.
"""

from __future__ import annotations

import os
import platform
from collections.abc import Mapping
from dataclasses import dataclass, field

# Path to the Appium entry script: appium.js (server <= 1.4.x) or
# main.js (server >= 1.5.x)
APPIUM_PATH = "APPIUM_BINARY_PATH"

# Path to the Node.js executable (node.exe on Windows, node elsewhere)
NODE_PATH = "NODE_BINARY_PATH"


@dataclass(frozen=True)
class HostEnvironment:
    """Snapshot of the host the server is launched on.

    Attributes:
        properties: Process-level overrides (settings, CLI options),
            consulted before the OS environment
        environ: OS environment variables
        system: Platform name as reported by platform.system()
    """

    properties: Mapping[str, str] = field(default_factory=dict)
    environ: Mapping[str, str] = field(default_factory=dict)
    system: str = ""

    @classmethod
    def current(cls, properties: Mapping[str, str] | None = None) -> HostEnvironment:
        """Build a HostEnvironment for the running process."""
        return cls(
            properties=dict(properties or {}),
            environ=dict(os.environ),
            system=platform.system(),
        )

    @property
    def is_windows(self) -> bool:
        return self.system.lower().startswith("win")

    def lookup(self, name: str) -> str | None:
        """
        Look up a variable, property first, then environment.

        Blank values count as unset.

        Args:
            name: Variable name (e.g. NODE_BINARY_PATH)

        Returns:
            The first non-blank value, or None
        """
        for source in (self.properties, self.environ):
            value = source.get(name)
            if value is not None and value.strip():
                return value
        return None
