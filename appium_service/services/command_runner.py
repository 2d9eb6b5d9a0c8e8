"""
Subprocess-backed command runner.

Runs the short-lived helper commands used to locate Node.js and the global
npm package root.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from ..core.interfaces.command import ICommandHandle, ICommandRunner


class CommandLine(ICommandHandle):
    """
    A single helper command invocation.

    Usage:
        cmd = CommandLine(["node", "get_node_js_executable.js"])
        cmd.execute()
        try:
            path = cmd.stdout.strip()
        finally:
            cmd.destroy()
    """

    def __init__(self, command: Sequence[str]) -> None:
        self._command = list(command)
        self._process: subprocess.Popen[str] | None = None
        self._stdout = ""

    @property
    def command(self) -> list[str]:
        return list(self._command)

    @property
    def stdout(self) -> str:
        return self._stdout

    @property
    def returncode(self) -> int | None:
        return self._process.returncode if self._process else None

    def execute(self) -> None:
        """Run the command and block until it exits."""
        self._process = subprocess.Popen(
            self._command,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
        )
        self._stdout, _ = self._process.communicate()

    def destroy(self) -> None:
        """Kill the process if still alive and close its pipes."""
        proc = self._process
        if proc is None:
            return
        if proc.poll() is None:
            proc.kill()
            proc.wait()
        if proc.stdout is not None:
            proc.stdout.close()
        self._process = None


class SubprocessCommandRunner(ICommandRunner):
    """Runs helper commands with subprocess.Popen."""

    def run(self, command: str, args: Sequence[str] = ()) -> CommandLine:
        handle = CommandLine([command, *args])
        try:
            handle.execute()
        except BaseException:
            handle.destroy()
            raise
        return handle
