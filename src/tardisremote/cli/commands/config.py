"""
Config command group.

Commands:
    - config show [--field FIELD] [--json]   # Display configuration
    - config set KEY VALUE                    # Update one field and save
    - config validate                         # Validate the config file
    - config reset [--yes]                    # Restore defaults
    - config path                             # Print the config file location
"""

import logging
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError

from tardisremote.cli.params import COLOR
from tardisremote.cli.session import echo_error
from tardisremote.exceptions import ConfigurationError, ErrorContext, wrap_pydantic_error
from tardisremote.models import AppConfig, Color
from tardisremote.models.config import DEFAULT_CONFIG_PATH
from tardisremote.utils import PydanticPersistence

logger = logging.getLogger(__name__)


def _config_path(ctx: click.Context) -> Path:
    obj = ctx.find_root().obj or {}
    return obj.get("config_path") or DEFAULT_CONFIG_PATH


def _load(ctx: click.Context) -> AppConfig:
    try:
        return AppConfig.load_or_default(_config_path(ctx))
    except ConfigurationError as e:
        echo_error(e)
        ctx.exit(1)


def _save(ctx: click.Context, cfg: AppConfig, path: Path) -> None:
    """Save the configuration, exiting with status 1 if it cannot be written."""
    with ErrorContext(f"save configuration to {path}", logger_instance=logger, re_raise=False) as save:
        cfg.save(path)

    if save.error is not None:
        echo_error(save.error)
        ctx.exit(1)


def _display(value: Any) -> str:
    if isinstance(value, Color):
        return value.to_hex()
    return str(value)


def _field_name(key: str) -> str:
    name = key.strip().replace("-", "_")
    if name not in AppConfig.model_fields:
        known = ", ".join(AppConfig.model_fields)
        raise click.BadParameter(f"unknown field {key!r} (known: {known})", param_hint="KEY")
    return name


@click.group(name="config")
def config():
    """Show and change TARDIS Remote settings."""
    pass


@config.command(name="show")
@click.option("--field", "-f", default=None, help="Show a single field")
@click.option("--json", "as_json", is_flag=True, help="Print the configuration as JSON")
@click.pass_context
def show(ctx, field: str | None, as_json: bool):
    """Display the current configuration."""
    cfg = _load(ctx)

    if as_json:
        click.echo(cfg.model_dump_json(indent=2))
        return

    names = [_field_name(field)] if field else list(AppConfig.model_fields)
    for name in names:
        click.echo(f"{name} = {_display(getattr(cfg, name))}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_value(ctx, key: str, value: str):
    """
    Set configuration field KEY to VALUE and save.

    \b
    Examples:
      tardis config set device_url http://192.168.1.42
      tardis config set fade_frame_rate 30
      tardis config set front_window_color '#FFCC00'
    """
    name = _field_name(key)
    path = _config_path(ctx)
    cfg = _load(ctx)

    new_value: Any = value
    if name == "front_window_color":
        new_value = COLOR.convert(value, None, ctx)

    try:
        updated = AppConfig.model_validate({**cfg.model_dump(), name: new_value})
    except ValidationError as e:
        echo_error(wrap_pydantic_error(e, str(path)))
        ctx.exit(1)

    _save(ctx, updated, path)

    click.echo(f"[OK] {name} = {_display(getattr(updated, name))}")
    click.echo(f"Configuration saved to {path}")


@config.command(name="validate")
@click.pass_context
def validate(ctx):
    """Check the configuration file for syntax and value errors."""
    path = _config_path(ctx)
    if not path.exists():
        click.echo(f"No configuration file at {path}; defaults are in use.")
        return

    is_valid, message = PydanticPersistence.validate_json(path, AppConfig)
    if is_valid:
        click.echo(f"[OK] {path}")
        return

    click.echo(f"[FAIL] {path}: {message}", err=True)
    ctx.exit(1)


@config.command(name="reset")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def reset(ctx, yes: bool):
    """Restore every setting to its default."""
    path = _config_path(ctx)
    if not yes:
        click.confirm(f"Reset all settings in {path}?", abort=True)
    _save(ctx, AppConfig(), path)
    click.echo(f"Configuration reset to defaults ({path})")


@config.command(name="path")
@click.pass_context
def show_path(ctx):
    """Print the location of the configuration file."""
    click.echo(str(_config_path(ctx)))
