"""Default command implementation."""

import sys

import click

from enginereg import CorruptedVersionDataError, format_error, format_suggestion
from enginereg.commands.utils import get_registry


@click.command()
@click.option("--set", "new_default", metavar="VERSION", help="Remember VERSION as the default")
@click.pass_context
def default(ctx, new_default: str | None):
    """Print or set the default engine version."""
    registry = get_registry(ctx)
    versions = registry.assemble()

    if new_default is not None:
        if not any(ver.version == new_default for ver in versions):
            click.echo(
                format_suggestion(
                    f"version '{new_default}' is unknown",
                    "run 'enginereg list --refresh' to see available versions",
                ),
                err=True,
            )
            sys.exit(2)
        registry.set_preferred_version(new_default)
        click.echo(f"✅ Default version set to {new_default}")
        return

    try:
        click.echo(registry.default_version(versions))
    except CorruptedVersionDataError as e:
        click.echo(format_error(str(e)), err=True)
        sys.exit(1)
