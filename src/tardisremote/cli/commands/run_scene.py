"""Scene command."""

import click

from tardisremote.cli.session import run_session


@click.command(name="scene")
@click.argument("name")
@click.pass_context
def scene(ctx, name: str):
    """Run the scene called NAME."""
    run_session(ctx, lambda manager: manager.play_scene(name))
    click.echo(f"Scene {name} started")
