"""Info command implementation."""

import sys

import click

from enginereg import Version, format_suggestion
from enginereg.commands.utils import get_registry


@click.command()
@click.argument("version")
@click.pass_context
def info(ctx, version: str):
    """Show release metadata for VERSION."""
    registry = get_registry(ctx)
    release = registry.release_info(Version(version=version))
    if release is None:
        click.echo(
            format_suggestion(
                f"no release info for '{version}'",
                "run 'enginereg refresh' to update the catalog",
            ),
            err=True,
        )
        sys.exit(2)

    click.echo(f"Version:  {release.version}")
    for label, value in [
        ("Date", release.date),
        ("Node", release.node),
        ("Chrome", release.chrome),
        ("V8", release.v8),
        ("Modules", release.modules),
    ]:
        if value:
            click.echo(f"{label + ':':<9} {value}")
    if release.files:
        click.echo(f"Files:    {', '.join(release.files)}")
