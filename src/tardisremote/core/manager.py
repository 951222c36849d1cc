"""The synchronization core that the UI and renderer talk to."""

import logging
from typing import Any

from tardisremote.device.protocols import DeviceAPI
from tardisremote.models import (
    AnimatedScene,
    AppConfig,
    AudioFile,
    CatalogKind,
    Color,
    LEDSection,
    SectionInfo,
)
from tardisremote.protocols import (
    CatalogObserver,
    CommandObserver,
    FadeObserver,
    PlaybackObserver,
    SectionObserver,
)

from .catalog import CatalogCache
from .dispatcher import CommandDispatcher
from .fade import FadeAnimator, FadeTask
from .playback import PlaybackState
from .section_store import SectionStateStore
from .tasks import TaskTracker

logger = logging.getLogger(__name__)


class TardisManager:
    """
    Client-side model of the TARDIS plus the commands that keep it in sync.

    Owns the section colors, playback state, catalog, opacity fade and the
    set of in-flight device commands. The host creates one instance and
    passes it to whatever needs it; there is no global instance.

    Read accessors never block. Intent methods (set_light_color, play_sound,
    fade_in, ...) update local state immediately and return; device calls
    complete in the background. They must be called from the thread running
    the event loop.

    Usage:
        async with TardisManager(HttpDeviceAPI(config.device_url), config) as tardis:
            tardis.set_light_color(LEDSection.TOP_LIGHT, Color(r=0, g=0, b=255))
            await tardis.wait_idle()
    """

    def __init__(self, api: DeviceAPI, config: AppConfig | None = None):
        """
        Initialize the core.

        Args:
            api: Device transport
            config: Application configuration (defaults if None)
        """
        self.config = config or AppConfig()
        self._api = api
        self._closed = False

        self._tasks = TaskTracker()
        self._store = SectionStateStore(seed={LEDSection.FRONT_WINDOW: self.config.front_window_color})
        self._playback = PlaybackState()
        self._catalog = CatalogCache(api)
        self._animator = FadeAnimator(frame_rate=self.config.fade_frame_rate)
        self._dispatcher = CommandDispatcher(api, self._store, self._playback, spawn=self._tasks.spawn)

        logger.info(f"TardisManager initialized for {getattr(api, 'base_url', type(api).__name__)}")

    # =================================================================
    # Components
    # =================================================================

    @property
    def api(self) -> DeviceAPI:
        return self._api

    @property
    def section_store(self) -> SectionStateStore:
        return self._store

    @property
    def playback(self) -> PlaybackState:
        return self._playback

    @property
    def catalog(self) -> CatalogCache:
        return self._catalog

    @property
    def animator(self) -> FadeAnimator:
        return self._animator

    @property
    def dispatcher(self) -> CommandDispatcher:
        return self._dispatcher

    # =================================================================
    # Observers
    # =================================================================

    def register_observer(self, observer: Any) -> None:
        """
        Register an observer with every component whose events it handles.

        The observer may implement any combination of the observer
        protocols in tardisremote.protocols.

        Raises:
            TypeError: If the observer implements none of them
        """
        routed = []
        if isinstance(observer, SectionObserver):
            self._store.register_observer(observer)
            routed.append("section")
        if isinstance(observer, PlaybackObserver):
            self._playback.register_observer(observer)
            routed.append("playback")
        if isinstance(observer, CatalogObserver):
            self._catalog.register_observer(observer)
            routed.append("catalog")
        if isinstance(observer, FadeObserver):
            self._animator.register_observer(observer)
            routed.append("fade")
        if isinstance(observer, CommandObserver):
            self._dispatcher.register_observer(observer)
            routed.append("command")

        if not routed:
            raise TypeError(f"{observer!r} implements no TARDIS observer protocol")
        logger.debug(f"Routed {observer!r} to {', '.join(routed)}")

    def unregister_observer(self, observer: Any) -> None:
        """Unregister an observer from every component it was routed to."""
        if isinstance(observer, SectionObserver):
            self._store.unregister_observer(observer)
        if isinstance(observer, PlaybackObserver):
            self._playback.unregister_observer(observer)
        if isinstance(observer, CatalogObserver):
            self._catalog.unregister_observer(observer)
        if isinstance(observer, FadeObserver):
            self._animator.unregister_observer(observer)
        if isinstance(observer, CommandObserver):
            self._dispatcher.unregister_observer(observer)

    # =================================================================
    # Read accessors
    # =================================================================

    def color_of(self, section: LEDSection) -> Color:
        return self._store.color_of(section)

    def section_colors(self) -> dict[LEDSection, Color]:
        return self._store.snapshot()

    @property
    def now_playing(self) -> AudioFile | None:
        return self._playback.current

    @property
    def opacity(self) -> float:
        return self._animator.opacity

    @property
    def sections(self) -> tuple[SectionInfo, ...]:
        return self._catalog.sections

    @property
    def sounds(self) -> tuple[AudioFile, ...]:
        return self._catalog.sounds

    @property
    def scenes(self) -> tuple[AnimatedScene, ...]:
        return self._catalog.scenes

    @property
    def pending_commands(self) -> int:
        return self._tasks.pending

    # =================================================================
    # Intents
    # =================================================================

    def set_light_color(self, section: LEDSection, color: Color) -> None:
        if self._ignored_after_close("set_light_color"):
            return
        self._dispatcher.set_light_color(section, color)

    def turn_on(self, section: LEDSection | None = None) -> None:
        if self._ignored_after_close("turn_on"):
            return
        self._dispatcher.turn_on(section)

    def turn_off(self, section: LEDSection | None = None) -> None:
        if self._ignored_after_close("turn_off"):
            return
        self._dispatcher.turn_off(section)

    def play_sound(self, sound: AudioFile) -> None:
        if self._ignored_after_close("play_sound"):
            return
        self._dispatcher.play_sound(sound)

    def stop_sound(self) -> None:
        if self._ignored_after_close("stop_sound"):
            return
        self._dispatcher.stop_sound()

    def play_scene(self, name: str) -> None:
        if self._ignored_after_close("play_scene"):
            return
        self._dispatcher.play_scene(name)

    def fade_in(self, duration: float) -> FadeTask:
        return self._animator.fade_in(duration)

    def fade_out(self, duration: float) -> FadeTask:
        return self._animator.fade_out(duration)

    def cancel_fade(self) -> None:
        self._animator.cancel()

    # =================================================================
    # Catalog
    # =================================================================

    async def fetch_sections(self) -> tuple[SectionInfo, ...]:
        if self._ignored_after_close("fetch_sections"):
            return self._catalog.sections
        return await self._catalog.fetch_sections()

    async def fetch_sounds(self) -> tuple[AudioFile, ...]:
        if self._ignored_after_close("fetch_sounds"):
            return self._catalog.sounds
        return await self._catalog.fetch_sounds()

    async def fetch_scenes(self) -> tuple[AnimatedScene, ...]:
        if self._ignored_after_close("fetch_scenes"):
            return self._catalog.scenes
        return await self._catalog.fetch_scenes()

    async def fetch_all(self) -> None:
        if self._ignored_after_close("fetch_all"):
            return
        await self._catalog.fetch_all()

    async def refresh(self, kind: CatalogKind) -> tuple:
        if self._ignored_after_close("refresh"):
            return self._catalog.items(kind)
        return await self._catalog.refresh(kind)

    # =================================================================
    # Lifecycle
    # =================================================================

    @property
    def closed(self) -> bool:
        return self._closed

    def _ignored_after_close(self, operation: str) -> bool:
        # No device calls once closed
        if self._closed:
            logger.warning(f"Ignoring {operation}: TardisManager is closed")
        return self._closed

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """
        Wait for every in-flight device command to finish.

        Returns:
            True if nothing is pending any more, False on timeout
        """
        return await self._tasks.wait_idle(timeout)

    async def close(self) -> None:
        """
        Stop the fade, drain pending commands and close the transport.

        Commands still running after config.command_drain_timeout are
        cancelled. Afterwards device intents and catalog fetches are
        ignored with a warning.
        """
        if self._closed:
            return
        self._closed = True

        await self._animator.close()
        if not await self._tasks.wait_idle(self.config.command_drain_timeout):
            logger.warning(f"Cancelling {self._tasks.pending} command(s) that did not finish in time")
            await self._tasks.cancel_all()

        close = getattr(self._api, "close", None)
        if close is not None:
            await close()
        logger.info("TardisManager closed")

    async def __aenter__(self) -> "TardisManager":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
