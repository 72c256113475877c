"""Local build management commands."""

import sys

import click

from enginereg import Version, format_suggestion, get_version_state
from enginereg.commands.utils import get_registry

BUILD_PATH = click.Path(file_okay=False, resolve_path=True)


@click.group()
def local():
    """Manage locally built engine versions."""
    pass


@local.command(name="add")
@click.argument("path", type=BUILD_PATH)
@click.option("--version", "-V", "version", required=True, help="Version of the build")
@click.option("--name", "-n", help="Display name for the build")
@click.pass_context
def local_add(ctx, path: str, version: str, name: str | None):
    """Register the local build at PATH."""
    registry = get_registry(ctx)
    existing = registry.find_local_version_by_path(path)
    if existing:
        click.echo(f"{path} is already registered as {existing.version}")
        return

    ver = Version(version=version, name=name, local_path=path)
    registry.add_local_version(ver)
    state = get_version_state(ver, registry.layout)
    click.echo(f"✅ Added {version} at {path} ({state.value})")


@local.command(name="remove")
@click.argument("path", type=BUILD_PATH)
@click.pass_context
def local_remove(ctx, path: str):
    """Forget the local build at PATH."""
    registry = get_registry(ctx)
    if registry.find_local_version_by_path(path) is None:
        click.echo(
            format_suggestion(
                f"no local build registered at {path}",
                "run 'enginereg list' to see registered builds",
            ),
            err=True,
        )
        sys.exit(2)

    registry.remove_local_version(path)
    click.echo(f"Removed local build at {path}")


@local.command(name="find")
@click.argument("path", type=BUILD_PATH)
@click.pass_context
def local_find(ctx, path: str):
    """Show the local build registered at PATH."""
    registry = get_registry(ctx)
    ver = registry.find_local_version_by_path(path)
    if ver is None:
        click.echo(f"No local build registered at {path}", err=True)
        sys.exit(2)

    click.echo(ver.version if not ver.name else f"{ver.version} ({ver.name})")
