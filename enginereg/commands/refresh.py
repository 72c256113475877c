"""Refresh command implementation."""

import asyncio

import click

from enginereg.commands.utils import get_registry


@click.command()
@click.option("--quiet", "-q", is_flag=True, help="Suppress output")
@click.pass_context
def refresh(ctx, quiet: bool):
    """Fetch the latest release catalog."""
    registry = get_registry(ctx)
    if not quiet:
        click.echo(f"Fetching releases from {registry.settings.releases_url}...")

    versions = asyncio.run(registry.fetch_versions())

    if not quiet:
        click.echo(f"{len(versions)} engine versions known.")
