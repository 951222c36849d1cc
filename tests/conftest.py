"""Pytest fixtures for tests."""

import asyncio
from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Any

import pytest

from tardisremote.core import TardisManager
from tardisremote.exceptions import RemoteCommandFailed, RemoteFetchFailed
from tardisremote.models import AnimatedScene, AppConfig, AudioFile, LEDSection, SectionInfo

_LIST_KINDS = {
    "list_sections": "sections",
    "list_sounds": "sounds",
    "list_scenes": "scenes",
}


class FakeDeviceAPI:
    """
    In-memory DeviceAPI that records every call.

    Failures are scripted per operation, optionally per target (the first
    argument of the call), and stay in place until succeed() is called.
    A delay makes every call suspend so tests can interleave actions.
    """

    def __init__(
        self,
        sections: list[SectionInfo] | None = None,
        sounds: list[AudioFile] | None = None,
        scenes: list[AnimatedScene] | None = None,
        delay: float = 0.0,
    ):
        self.sections = list(sections or [])
        self.sounds = list(sounds or [])
        self.scenes = list(scenes or [])
        self.delay = delay
        self.calls: list[tuple[Any, ...]] = []
        self.failures: dict[tuple[str, Any], Exception] = {}
        self.closed = False

    def fail(self, operation: str, target: Any = None, error: Exception | None = None) -> None:
        """Make `operation` (optionally only for `target`) raise."""
        if error is None:
            if operation in _LIST_KINDS:
                error = RemoteFetchFailed(_LIST_KINDS[operation], status=500)
            else:
                error = RemoteCommandFailed(operation, target=str(target) if target else None, status=500)
        self.failures[(operation, target)] = error

    def succeed(self, operation: str, target: Any = None) -> None:
        self.failures.pop((operation, target), None)

    def calls_to(self, operation: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == operation]

    async def _call(self, operation: str, *args: Any) -> None:
        self.calls.append((operation, *args))
        if self.delay:
            await asyncio.sleep(self.delay)
        target = args[0] if args else None
        error = self.failures.get((operation, target)) or self.failures.get((operation, None))
        if error is not None:
            raise error

    async def list_sections(self) -> list[SectionInfo]:
        await self._call("list_sections")
        return list(self.sections)

    async def list_sounds(self) -> list[AudioFile]:
        await self._call("list_sounds")
        return list(self.sounds)

    async def list_scenes(self) -> list[AnimatedScene]:
        await self._call("list_scenes")
        return list(self.scenes)

    async def set_color(self, section, color) -> None:
        await self._call("set_color", section, color)

    async def turn_on(self, section=None) -> None:
        await self._call("turn_on", section)

    async def turn_off(self, section=None) -> None:
        await self._call("turn_off", section)

    async def play_sound(self, file_name: str) -> None:
        await self._call("play_sound", file_name)

    async def stop_sound(self) -> None:
        await self._call("stop_sound")

    async def play_scene(self, name: str) -> None:
        await self._call("play_scene", name)

    async def close(self) -> None:
        self.closed = True


class RecordingObserver:
    """Observer implementing every core observer protocol; keeps all events."""

    def __init__(self):
        self.section_events: list[tuple] = []
        self.playback_events: list[tuple] = []
        self.catalog_events: list[tuple] = []
        self.fade_events: list[tuple] = []
        self.command_events: list[tuple] = []

    def on_section_event(self, event, sections, color):
        self.section_events.append((event, list(sections), color))

    def on_playback_event(self, event, sound):
        self.playback_events.append((event, sound))

    def on_catalog_event(self, event, kind):
        self.catalog_events.append((event, kind))

    def on_fade_event(self, event, opacity):
        self.fade_events.append((event, opacity))

    def on_command_event(self, event, operation, target, error=None):
        self.command_events.append((event, operation, target, error))


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sounds():
    """A small sound catalog."""
    return [
        AudioFile(friendly_name="Cloister Bell", file_name="cloister_bell.mp3"),
        AudioFile(friendly_name="Dematerialise", file_name="takeoff.mp3"),
    ]


@pytest.fixture
def scenes():
    """A small scene catalog."""
    return [
        AnimatedScene(name="Materialize", description="Landing sequence"),
        AnimatedScene(name="Police Box"),
    ]


@pytest.fixture
def sections():
    """The sections a real controller reports."""
    return [SectionInfo(name=s.value) for s in LEDSection.concrete()]


@pytest.fixture
def fake_api(sections, sounds, scenes):
    """A FakeDeviceAPI preloaded with the sample catalog."""
    return FakeDeviceAPI(sections=sections, sounds=sounds, scenes=scenes)


@pytest.fixture
def config():
    """Default configuration with a fast frame rate for fade tests."""
    return AppConfig(fade_frame_rate=100)


@pytest.fixture
def manager(fake_api, config):
    """A TardisManager wired to the fake device."""
    return TardisManager(fake_api, config)


@pytest.fixture
def observer():
    """An observer that records every event."""
    return RecordingObserver()


@pytest.fixture
def make_api(sections, sounds, scenes):
    """Factory for FakeDeviceAPI instances with custom catalog or delay."""

    def factory(**kwargs):
        kwargs.setdefault("sections", sections)
        kwargs.setdefault("sounds", sounds)
        kwargs.setdefault("scenes", scenes)
        return FakeDeviceAPI(**kwargs)

    return factory
