"""CLI commands for tardisremote."""

from .audio import play, stop
from .catalog import scenes, sections, sounds
from .config import config
from .lights import color, turn_off, turn_on
from .run_scene import scene

__all__ = [
    "color",
    "config",
    "play",
    "scene",
    "scenes",
    "sections",
    "sounds",
    "stop",
    "turn_off",
    "turn_on",
]
