"""List command implementation."""

import asyncio
import logging

import click

from enginereg import CorruptedVersionDataError, ReleaseChannel, get_release_channel
from enginereg.commands.utils import get_registry

_logging = logging.getLogger(__name__)


@click.command(name="list")
@click.option("--refresh", is_flag=True, help="Refresh the catalog before listing")
@click.option(
    "--channel",
    type=click.Choice([c.value for c in ReleaseChannel]),
    help="Only show versions from this release channel",
)
@click.pass_context
def list_versions(ctx, refresh: bool, channel: str | None):
    """List known and local engine versions."""
    registry = get_registry(ctx)
    if refresh:
        asyncio.run(registry.fetch_versions())

    versions = registry.assemble()
    if not versions:
        click.echo("No engine versions known.")
        return

    try:
        default = registry.default_version(versions)
    except CorruptedVersionDataError as e:
        _logging.warning(f"No default version: {e}")
        default = None

    for ver in versions:
        release_channel = get_release_channel(ver)
        if channel and release_channel.value != channel:
            continue

        marker = "*" if ver.version == default else " "
        line = (
            f"{marker} {ver.version:<28} {release_channel.value:<8} "
            f"{ver.source.value:<7} {ver.state.value}"
        )
        if ver.local_path:
            line += f"  {ver.local_path}"
        click.echo(line.rstrip())
