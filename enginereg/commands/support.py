"""Support window command implementation."""

import sys

import click

from enginereg.commands.utils import get_registry


@click.command()
@click.option("--major", type=int, help="Check whether MAJOR has been released")
@click.pass_context
def support(ctx, major: int | None):
    """Show the oldest supported major, or check a major's release status."""
    registry = get_registry(ctx)

    if major is not None:
        if registry.is_released_major(major):
            click.echo(f"{major} is a released major")
        else:
            click.echo(f"{major} is not a released major")
            sys.exit(1)
        return

    oldest = registry.oldest_supported_major()
    count = registry.settings.supported_branch_count
    if oldest is None:
        click.echo(f"Fewer than {count} release branches are known.")
        sys.exit(1)

    click.echo(f"Oldest supported major: {oldest} ({count} supported branches)")
