"""CLI command definitions for enginereg."""

import click

from enginereg.commands.channel import channel
from enginereg.commands.default import default
from enginereg.commands.info import info
from enginereg.commands.list import list_versions
from enginereg.commands.local import local
from enginereg.commands.refresh import refresh
from enginereg.commands.support import support


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.pass_context
def cli(ctx, debug):
    """Track known and locally built engine versions."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


cli.add_command(list_versions, name="list")
cli.add_command(default)
cli.add_command(local)
cli.add_command(channel)
cli.add_command(refresh)
cli.add_command(support)
cli.add_command(info)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
