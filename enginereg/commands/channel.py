"""Channel command implementation."""

import click

from enginereg import get_release_channel


@click.command()
@click.argument("version")
def channel(version: str):
    """Print the release channel of VERSION."""
    click.echo(get_release_channel(version).value)
