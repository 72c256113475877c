"""Shared utility functions for commands."""

import sys

import click

from enginereg import ConfigError, format_error, open_registry, setup_logging
from enginereg.registry import VersionRegistry


def get_registry(ctx: click.Context) -> VersionRegistry:
    """Configure logging and open the registry for a command.

    Exits with status 1 if the settings cannot be loaded.
    """
    setup_logging(ctx.obj.get("debug", False))
    try:
        return open_registry()
    except ConfigError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
