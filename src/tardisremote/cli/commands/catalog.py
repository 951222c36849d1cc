"""Catalog listing commands: sections, sounds, scenes."""

import json

import click

from tardisremote.cli.session import echo_error, run_session
from tardisremote.core import TardisManager
from tardisremote.models import AnimatedScene, AudioFile, CatalogKind, SectionInfo


def _fetch(ctx: click.Context, kind: CatalogKind) -> tuple:
    """Fetch one catalog collection, exiting with status 1 on failure."""
    result: dict = {}

    async def fetch(manager: TardisManager) -> None:
        result["items"] = await manager.catalog.fetch(kind)
        result["error"] = manager.catalog.last_error(kind)

    run_session(ctx, fetch)

    if result.get("error") is not None:
        echo_error(result["error"])
        ctx.exit(1)
    return result.get("items", ())


def _echo_json(items: tuple) -> None:
    click.echo(json.dumps([item.model_dump() for item in items], indent=2))


def _format_section(info: SectionInfo) -> str:
    line = info.name
    if info.description:
        line += f" - {info.description}"
    if info.led_section is None:
        line += "  [unknown to this client]"
    return line


def _format_sound(sound: AudioFile) -> str:
    return f"{sound.friendly_name}  ({sound.file_name})"


def _format_scene(scene_: AnimatedScene) -> str:
    return f"{scene_.name} - {scene_.description}" if scene_.description else scene_.name


@click.command(name="sections")
@click.option("--json", "as_json", is_flag=True, help="Print the list as JSON")
@click.pass_context
def sections(ctx, as_json: bool):
    """List the LED sections reported by the device."""
    items = _fetch(ctx, CatalogKind.SECTIONS)
    if as_json:
        _echo_json(items)
        return
    if not items:
        click.echo("The device reported no sections.")
        return
    for info in items:
        click.echo(_format_section(info))


@click.command(name="sounds")
@click.option("--json", "as_json", is_flag=True, help="Print the list as JSON")
@click.pass_context
def sounds(ctx, as_json: bool):
    """List the sounds the device can play."""
    items = _fetch(ctx, CatalogKind.SOUNDS)
    if as_json:
        _echo_json(items)
        return
    if not items:
        click.echo("The device reported no sounds.")
        return
    for sound in items:
        click.echo(_format_sound(sound))


@click.command(name="scenes")
@click.option("--json", "as_json", is_flag=True, help="Print the list as JSON")
@click.pass_context
def scenes(ctx, as_json: bool):
    """List the scenes stored on the device."""
    items = _fetch(ctx, CatalogKind.SCENES)
    if as_json:
        _echo_json(items)
        return
    if not items:
        click.echo("The device reported no scenes.")
        return
    for scene_ in items:
        click.echo(_format_scene(scene_))
