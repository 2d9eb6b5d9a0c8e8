"""
Shared pytest fixtures for appium_service tests.

This module provides fixtures for exercising resolution without spawning
processes:
- fake_runner: ICommandRunner returning canned output per command
- posix_host / windows_host: simulated host environments
- appium_js / node_executable: real files standing in for installed binaries
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

import pytest

from appium_service.core.bootstrap import reset as reset_app
from appium_service.core.environment import HostEnvironment
from appium_service.core.interfaces.command import ICommandHandle, ICommandRunner
from appium_service.services.builder import AppiumServiceBuilder


class FakeCommandHandle(ICommandHandle):
    """Handle with canned output that records whether it was destroyed."""

    def __init__(self, command: list[str], stdout: str) -> None:
        self._command = command
        self._stdout = stdout
        self.destroyed = False

    @property
    def command(self) -> list[str]:
        return list(self._command)

    @property
    def stdout(self) -> str:
        return self._stdout

    def destroy(self) -> None:
        self.destroyed = True


class FakeCommandRunner(ICommandRunner):
    """
    Runner returning canned output keyed by command name.

    A response may be a string (captured stdout) or an exception instance,
    which is raised instead of running.
    """

    def __init__(self, responses: dict[str, str | BaseException] | None = None) -> None:
        self.responses: dict[str, str | BaseException] = dict(responses or {})
        self.calls: list[list[str]] = []
        self.handles: list[FakeCommandHandle] = []

    def run(self, command: str, args: Sequence[str] = ()) -> FakeCommandHandle:
        self.calls.append([command, *args])
        response = self.responses.get(command, "")
        if isinstance(response, BaseException):
            raise response
        handle = FakeCommandHandle([command, *args], response)
        self.handles.append(handle)
        return handle


@pytest.fixture(autouse=True)
def clean_container():
    """Give every test an empty service container."""
    reset_app()
    yield
    reset_app()


@pytest.fixture
def fake_runner() -> FakeCommandRunner:
    return FakeCommandRunner()


@pytest.fixture
def posix_host() -> HostEnvironment:
    return HostEnvironment(properties={}, environ={}, system="Linux")


@pytest.fixture
def windows_host() -> HostEnvironment:
    return HostEnvironment(properties={}, environ={}, system="Windows")


@pytest.fixture
def appium_js(tmp_path: Path) -> Path:
    """An existing entry script file."""
    script = tmp_path / "appium" / "build" / "lib" / "main.js"
    script.parent.mkdir(parents=True)
    script.write_text("// appium\n")
    return script


@pytest.fixture
def node_executable(tmp_path: Path) -> Path:
    """An existing file standing in for the Node.js binary."""
    node = tmp_path / "bin" / "node"
    node.parent.mkdir(parents=True)
    node.write_text("")
    return node


@pytest.fixture
def make_builder(
    posix_host: HostEnvironment, fake_runner: FakeCommandRunner
) -> Iterator[Callable[..., AppiumServiceBuilder]]:
    """Factory for builders wired to the fake runner; closed after the test."""
    created: list[AppiumServiceBuilder] = []

    def factory(
        host: HostEnvironment | None = None,
        runner: ICommandRunner | None = None,
        **kwargs,
    ) -> AppiumServiceBuilder:
        builder = AppiumServiceBuilder(
            host=host or posix_host,
            runner=runner or fake_runner,
            **kwargs,
        )
        created.append(builder)
        return builder

    yield factory

    for builder in created:
        builder.close()
