"""Transport protocol for the TARDIS controller."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tardisremote.models import AnimatedScene, AudioFile, Color, LEDSection, SectionInfo


@runtime_checkable
class DeviceAPI(Protocol):
    """Async operations offered by the TARDIS controller.

    Implementations raise RemoteFetchFailed / DecodeFailed from the list
    calls and RemoteCommandFailed from the commands. None of the calls is
    assumed idempotent by the transport; the core only ever issues calls
    that are safe to repeat.

    Sections passed to set_color are always concrete. For turn_on and
    turn_off, None means "every section" and is sent without a qualifier.
    """

    async def list_sections(self) -> list[SectionInfo]:
        """Return the LED sections known to the device, in device order."""
        ...

    async def list_sounds(self) -> list[AudioFile]:
        """Return the playable sounds, in device order."""
        ...

    async def list_scenes(self) -> list[AnimatedScene]:
        """Return the stored scenes, in device order."""
        ...

    async def set_color(self, section: LEDSection, color: Color) -> None:
        """Set one concrete section to an RGB color."""
        ...

    async def turn_on(self, section: LEDSection | None = None) -> None:
        """Turn one section (or all, for None) on."""
        ...

    async def turn_off(self, section: LEDSection | None = None) -> None:
        """Turn one section (or all, for None) off."""
        ...

    async def play_sound(self, file_name: str) -> None:
        """Start playing a sound by file name."""
        ...

    async def stop_sound(self) -> None:
        """Stop whatever sound is playing."""
        ...

    async def play_scene(self, name: str) -> None:
        """Run a stored scene by name."""
        ...
