"""
Native Click implementation of the args command.

Usage: appium-service args [OPTIONS]
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from ...core.exceptions import AppiumServiceException
from ..options import configure_builder, server_options

if TYPE_CHECKING:
    from ..context import AppiumContext


@click.command("args")
@server_options
@click.option("--json", "as_json", is_flag=True, help="Print the full launch descriptor as JSON.")
@click.pass_obj
def args(ctx: AppiumContext, as_json: bool, **options: Any) -> None:
    """Resolve and print the server command line without starting it.

    Prints the Node.js executable followed by one argument per line.

    \b
    Examples:

        appium-service args
        appium-service args --port 4800 --arg relaxed-security
        appium-service args --json
    """
    try:
        with configure_builder(ctx.settings, **options) as builder:
            descriptor = builder.build_descriptor()
    except AppiumServiceException as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(descriptor.model_dump_json(indent=2))
        return
    for token in descriptor.command:
        click.echo(token)
