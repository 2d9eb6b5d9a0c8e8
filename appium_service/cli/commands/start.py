"""
Native Click implementation of the start command.

Usage: appium-service start [OPTIONS]
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import click

from ...core.exceptions import AppiumServiceException
from ..options import configure_builder, server_options

if TYPE_CHECKING:
    from ..context import AppiumContext


@click.command("start")
@server_options
@click.pass_obj
def start(ctx: AppiumContext, **options: Any) -> None:
    """Start a local Appium server and keep it running.

    Blocks until interrupted with Ctrl+C, then stops the server.

    \b
    Examples:

        appium-service start
        appium-service start --any-port --log appium.log
    """
    try:
        with configure_builder(ctx.settings, **options) as builder:
            service = builder.build()
        service.start()
    except AppiumServiceException as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Appium server is running at {service.url}")
    click.echo("Press Ctrl+C to stop.")

    interrupted = False
    try:
        while service.is_running():
            time.sleep(1)
    except KeyboardInterrupt:
        interrupted = True
        click.echo("Stopping Appium server...")
    finally:
        service.stop()

    if not interrupted:
        raise click.ClickException("The Appium server exited unexpectedly")
