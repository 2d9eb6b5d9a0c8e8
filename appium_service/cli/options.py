"""
Server options shared by the launch commands.

Every option here overrides the corresponding settings value.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import click

from ..core.models.launch import TimeUnit
from ..core.settings import AppiumServiceSettings
from ..flags import normalize_flag
from ..services.builder import AppiumServiceBuilder

F = TypeVar("F", bound=Callable[..., Any])

_SERVER_OPTIONS = [
    click.option("--port", type=click.IntRange(min=0), help="Server port (0 picks a free port)."),
    click.option("--any-port", is_flag=True, help="Start on any free port."),
    click.option("--address", help="Bind address (IPv4 or IPv6 literal)."),
    click.option(
        "--log",
        "log_file",
        type=click.Path(dir_okay=False, path_type=Path),
        help="File the server writes its log to.",
    ),
    click.option(
        "--node",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Node.js executable.",
    ),
    click.option(
        "--appium-js",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Appium entry script (appium.js or main.js).",
    ),
    click.option(
        "--timeout",
        type=click.FloatRange(min=0, min_open=True),
        help="Seconds to wait for the server to start.",
    ),
    click.option(
        "--arg",
        "server_args",
        multiple=True,
        metavar="NAME[=VALUE]",
        help="Extra server flag; repeatable. Omit VALUE for boolean flags.",
    ),
    click.option(
        "--env",
        "env_vars",
        multiple=True,
        metavar="NAME=VALUE",
        help="Environment variable for the server; repeatable.",
    ),
]


def server_options(f: F) -> F:
    """Attach the shared server options to a command."""
    for option in reversed(_SERVER_OPTIONS):
        f = option(f)
    return f


def parse_server_arg(raw: str) -> tuple[str, str]:
    """
    Split a NAME[=VALUE] flag.

    Names without leading dashes get "--" prepended.

    Examples:
        >>> parse_server_arg("relaxed-security")
        ('--relaxed-security', '')
        >>> parse_server_arg("--log-level=debug")
        ('--log-level', 'debug')
    """
    name, _, value = raw.partition("=")
    name = normalize_flag(name)
    if not name:
        raise click.BadParameter(f"missing flag name in {raw!r}", param_hint="--arg")
    return name, value


def parse_env_var(raw: str) -> tuple[str, str]:
    """Split a NAME=VALUE environment assignment."""
    name, sep, value = raw.partition("=")
    if not sep or not name.strip():
        raise click.BadParameter(f"expected NAME=VALUE, got {raw!r}", param_hint="--env")
    return name.strip(), value


def configure_builder(
    settings: AppiumServiceSettings,
    *,
    port: int | None = None,
    any_port: bool = False,
    address: str | None = None,
    log_file: Path | None = None,
    node: Path | None = None,
    appium_js: Path | None = None,
    timeout: float | None = None,
    server_args: tuple[str, ...] = (),
    env_vars: tuple[str, ...] = (),
) -> AppiumServiceBuilder:
    """Create a builder from settings, then apply the command line options."""
    builder = AppiumServiceBuilder.from_settings(settings)

    if port is not None:
        builder.using_port(port)
    if any_port:
        builder.using_any_free_port()
    if address is not None:
        builder.with_ip_address(address)
    if log_file is not None:
        builder.with_log_file(log_file)
    if node is not None:
        builder.using_driver_executable(node)
    if appium_js is not None:
        builder.with_appium_js(appium_js)
    if timeout is not None:
        builder.with_startup_timeout(timeout, TimeUnit.SECONDS)
    if env_vars:
        environment = dict(settings.env)
        environment.update(parse_env_var(raw) for raw in env_vars)
        builder.with_environment(environment)
    for raw in server_args:
        name, value = parse_server_arg(raw)
        builder.with_argument(name, value)

    return builder
