"""LED commands: color, on, off."""

import click

from tardisremote.cli.params import COLOR, SECTION
from tardisremote.cli.session import run_session
from tardisremote.models import Color, LEDSection


@click.command(name="color")
@click.argument("section", type=SECTION)
@click.argument("color", type=COLOR)
@click.pass_context
def color(ctx, section: LEDSection, color: Color):
    """
    Set SECTION to COLOR.

    COLOR is '#RRGGBB' or three values between 0 and 1 ('1,0.5,0').
    Use 'all' as SECTION to set every section.

    \b
    Examples:
      tardis color top_light '#0000FF'
      tardis color all 1,0.8,0
    """
    run_session(ctx, lambda manager: manager.set_light_color(section, color))
    click.echo(f"{section.value} -> {color.to_hex()}")


@click.command(name="on")
@click.argument("section", type=SECTION, required=False)
@click.pass_context
def turn_on(ctx, section: LEDSection | None):
    """Turn SECTION on (every section if omitted)."""
    run_session(ctx, lambda manager: manager.turn_on(section))
    click.echo(f"{(section or LEDSection.ALL).value}: on")


@click.command(name="off")
@click.argument("section", type=SECTION, required=False)
@click.pass_context
def turn_off(ctx, section: LEDSection | None):
    """Turn SECTION off (every section if omitted)."""
    run_session(ctx, lambda manager: manager.turn_off(section))
    click.echo(f"{(section or LEDSection.ALL).value}: off")
