"""Observer protocol definitions for synchronization core events.

The UI and renderer collaborators never mutate core state directly; they read
accessors on TardisManager and subscribe through these protocols.

Threading:
    All callbacks are invoked on the asyncio event loop thread that owns the
    core. Implementations must not block.

Error Handling:
    Exceptions raised by observers are caught and logged by ObserverManager.
    They never reach the component that emitted the event.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tardisremote.exceptions import TardisRemoteError
    from tardisremote.models import AudioFile, CatalogKind, Color, LEDSection

from .events import CatalogEvent, CommandEvent, FadeEvent, PlaybackEvent, SectionEvent


@runtime_checkable
class SectionObserver(Protocol):
    """Observer that receives local section color changes."""

    def on_section_event(
        self, event: SectionEvent, sections: list["LEDSection"], color: "Color | None"
    ) -> None:
        """
        Handle section color changes.

        Args:
            event: The type of section event
            sections: Concrete sections affected (never contains ALL)
            color: New color for all listed sections, or None for RESET
        """
        ...


@runtime_checkable
class PlaybackObserver(Protocol):
    """Observer that receives playback state changes."""

    def on_playback_event(self, event: PlaybackEvent, sound: "AudioFile | None") -> None:
        """
        Handle playback state changes.

        Args:
            event: STARTED or STOPPED
            sound: The sound that started, or the one that stopped (None if nothing was playing)
        """
        ...


@runtime_checkable
class CatalogObserver(Protocol):
    """Observer that receives catalog load results."""

    def on_catalog_event(self, event: CatalogEvent, kind: "CatalogKind") -> None:
        """
        Handle catalog changes.

        Args:
            event: The type of catalog event
            kind: Which collection changed
        """
        ...


@runtime_checkable
class FadeObserver(Protocol):
    """Observer that receives opacity updates from the fade animator."""

    def on_fade_event(self, event: FadeEvent, opacity: float) -> None:
        """
        Handle fade progress.

        Args:
            event: The type of fade event
            opacity: Current opacity after the event
        """
        ...


@runtime_checkable
class CommandObserver(Protocol):
    """Observer that receives the outcome of every device command."""

    def on_command_event(
        self,
        event: CommandEvent,
        operation: str,
        target: str | None,
        error: "TardisRemoteError | None" = None,
    ) -> None:
        """
        Handle command results.

        Args:
            event: SUCCEEDED or FAILED
            operation: Command name (e.g. "set_color", "play_sound")
            target: Section, sound or scene addressed, if any
            error: The failure, for FAILED events
        """
        ...
