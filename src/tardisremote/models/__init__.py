"""Data models for the TARDIS remote."""

from .catalog import AnimatedScene, AudioFile, SectionInfo
from .color import DEFAULT_ACCENT, Color, quantize_channel
from .config import AppConfig
from .enums import CatalogKind, FadeDirection, FadeState, LEDSection, expand_section

__all__ = [
    "DEFAULT_ACCENT",
    # Models
    "AnimatedScene",
    "AppConfig",
    "AudioFile",
    # Enums
    "CatalogKind",
    "Color",
    "FadeDirection",
    "FadeState",
    "LEDSection",
    "SectionInfo",
    "expand_section",
    "quantize_channel",
]
