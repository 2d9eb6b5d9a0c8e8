"""
Click context extension for the appium-service CLI.

Provides AppiumContext, the object passed through the Click command chain
via ctx.obj.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from ..core.bootstrap import bootstrap
from ..core.settings import AppiumServiceSettings, load_settings


@dataclass
class AppiumContext:
    """Extended context passed through Click command chain.

    Attributes:
        cwd: Current working directory
        settings: Merged settings (config file, environment, defaults)
        is_interactive: Whether stdin is a TTY
    """

    cwd: Path
    settings: AppiumServiceSettings
    is_interactive: bool

    @classmethod
    def create(cls, cwd: Path | None = None, config_path: Path | None = None) -> AppiumContext:
        """Create an AppiumContext for the current environment.

        Loads settings and bootstraps the service container.

        Args:
            cwd: Working directory override (defaults to Path.cwd())
            config_path: Explicit config file

        Returns:
            Configured AppiumContext instance
        """
        if cwd is None:
            cwd = Path.cwd()

        try:
            settings = load_settings(config_path=config_path, start_dir=str(cwd))
        except ValidationError as e:
            raise click.ClickException(f"Invalid configuration:\n{e}") from e

        if settings.config_error:
            click.echo(f"Warning: {settings.config_error}", err=True)

        bootstrap(settings)

        return cls(
            cwd=cwd,
            settings=settings,
            is_interactive=sys.stdin.isatty(),
        )
