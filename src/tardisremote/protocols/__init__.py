"""Protocol definitions for the synchronization core's observer patterns.

- Events: section, playback, catalog, fade and command events
- Observers: protocols for components that react to these events

The DeviceAPI transport protocol lives in tardisremote.device.protocols.
"""

from .events import CatalogEvent, CommandEvent, FadeEvent, PlaybackEvent, SectionEvent
from .observers import (
    CatalogObserver,
    CommandObserver,
    FadeObserver,
    PlaybackObserver,
    SectionObserver,
)

__all__ = [
    # Events
    "CatalogEvent",
    # Observers
    "CatalogObserver",
    "CommandEvent",
    "CommandObserver",
    "FadeEvent",
    "FadeObserver",
    "PlaybackEvent",
    "PlaybackObserver",
    "SectionEvent",
    "SectionObserver",
]
