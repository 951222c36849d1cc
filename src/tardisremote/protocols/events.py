"""Domain events for observer pattern.

This module defines events that can occur within the synchronization core:
- Section events: Local LED color model changes
- Playback events: Which sound the core believes is playing
- Catalog events: Catalog collections loaded or failed
- Fade events: Opacity animation progress
- Command events: Outcome of commands sent to the device
"""

from enum import Enum


class SectionEvent(Enum):
    """Events from the section color store."""

    COLOR_CHANGED = "color_changed"    # One or more sections got a new color
    RESET = "reset"                    # Store restored to its seed colors


class PlaybackEvent(Enum):
    """Events from the playback state."""

    STARTED = "started"      # A sound was selected (optimistically playing)
    STOPPED = "stopped"      # Playback cleared (stop, toggle, or failed play)


class CatalogEvent(Enum):
    """Events from the catalog cache."""

    LOADED = "loaded"                # A collection was fetched successfully
    FETCH_FAILED = "fetch_failed"    # A fetch failed; collection left as it was
    INVALIDATED = "invalidated"      # A collection was cleared for re-fetch


class FadeEvent(Enum):
    """Events from the fade animator."""

    STARTED = "started"        # A new fade task began running
    STEP = "step"              # Opacity was written by a step
    COMPLETED = "completed"    # Fade ran to the end and snapped to its final value
    CANCELLED = "cancelled"    # Fade was superseded or cancelled


class CommandEvent(Enum):
    """Events from the command dispatcher."""

    SUCCEEDED = "succeeded"    # Device accepted the command
    FAILED = "failed"          # Device rejected the command or was unreachable
