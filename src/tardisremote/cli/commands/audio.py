"""Audio commands: play, stop."""

import click

from tardisremote.cli.session import run_session
from tardisremote.models import AudioFile


@click.command(name="play")
@click.argument("file_name")
@click.option("--name", "friendly_name", default=None, help="Display name (defaults to FILE_NAME)")
@click.pass_context
def play(ctx, file_name: str, friendly_name: str | None):
    """Play the sound stored on the device as FILE_NAME."""
    sound = AudioFile(file_name=file_name, friendly_name=friendly_name or file_name)
    run_session(ctx, lambda manager: manager.play_sound(sound))
    click.echo(f"Playing {sound.friendly_name}")


@click.command(name="stop")
@click.pass_context
def stop(ctx):
    """Stop the sound that is playing."""
    run_session(ctx, lambda manager: manager.stop_sound())
    click.echo("Stopped")
