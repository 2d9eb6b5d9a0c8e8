"""
Click-based CLI for appium_service.

This module provides the main Click command group and serves as the
entry point for the appium-service CLI.

Usage:
    from appium_service.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from .context import AppiumContext

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("appium-local-service")
except PackageNotFoundError:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="appium-service")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file (default: nearest .appium-service/config.toml).",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None) -> None:
    """appium-service - run a local Appium server

    Locates Node.js and the Appium entry script on this machine and
    launches the server.

    \b
    Commands:
        appium-service args     Print the resolved server command line
        appium-service start    Start the server and wait for Ctrl+C

    \b
    Environment:
        NODE_BINARY_PATH        Node.js executable to use
        APPIUM_BINARY_PATH      Appium entry script to use
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        ctx.obj = AppiumContext.create(config_path=config_path)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


register_commands()


__all__ = [
    "AppiumContext",
    "__version__",
    "cli",
    "register_commands",
]
