"""Translation of user intent into optimistic local state plus device commands."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Coroutine
from typing import Any

from tardisremote.device.protocols import DeviceAPI
from tardisremote.exceptions import RemoteError, TardisRemoteError, wrap_transport_error
from tardisremote.models import AudioFile, Color, LEDSection
from tardisremote.protocols import CommandEvent, CommandObserver
from tardisremote.utils import ObserverManager

from .playback import PlaybackState
from .section_store import SectionStateStore

logger = logging.getLogger(__name__)

Spawner = Callable[[Coroutine[Any, Any, Any], str], asyncio.Task]


class CommandDispatcher:
    """
    Applies each user action to local state first, then sends it to the device.

    Every public method is synchronous and returns as soon as the local state
    has been updated; the device call runs as a separate task created through
    the injected spawner. Remote failures are logged and broadcast to command
    observers. Optimistic state is kept on failure, with one exception: a
    failed play clears playback if that sound is still the selected one.
    """

    def __init__(
        self,
        api: DeviceAPI,
        store: SectionStateStore,
        playback: PlaybackState,
        spawn: Spawner,
    ):
        """
        Initialize the dispatcher.

        Args:
            api: Device transport
            store: Section color store to update optimistically
            playback: Playback state to update optimistically
            spawn: Callable that schedules and tracks a coroutine
        """
        self._api = api
        self._store = store
        self._playback = playback
        self._spawn = spawn
        self._observers = ObserverManager[CommandObserver](observer_type_name="command")

    def register_observer(self, observer: CommandObserver) -> None:
        """Register an observer to receive command outcomes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: CommandObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    # =================================================================
    # Lights
    # =================================================================

    def set_light_color(self, section: LEDSection, color: Color) -> list[asyncio.Task]:
        """
        Set the color of one section, or of every section for ALL.

        ALL fans out into one independent command per concrete section; each
        succeeds or fails on its own and they may land in any order.

        Returns:
            The spawned command tasks
        """
        affected = self._store.set_color(section, color)
        logger.debug(f"Setting {section.value} to {color.to_hex()}")

        return [
            self._dispatch(
                "set_color",
                concrete.value,
                lambda concrete=concrete: self._api.set_color(concrete, color),
            )
            for concrete in affected
        ]

    def turn_on(self, section: LEDSection | None = None) -> asyncio.Task:
        """
        Turn a section (or all sections) on. Stored colors are left alone.

        Args:
            section: Target section; None or ALL address the whole prop
        """
        wire = self._unqualified(section)
        return self._dispatch("turn_on", self._target_name(wire), lambda: self._api.turn_on(wire))

    def turn_off(self, section: LEDSection | None = None) -> asyncio.Task:
        """
        Turn a section (or all sections) off, forcing its local color to black.

        Args:
            section: Target section; None or ALL address the whole prop
        """
        self._store.set_color(section or LEDSection.ALL, Color.off())
        wire = self._unqualified(section)
        return self._dispatch("turn_off", self._target_name(wire), lambda: self._api.turn_off(wire))

    @staticmethod
    def _unqualified(section: LEDSection | None) -> LEDSection | None:
        # The device takes an absent section to mean every section
        if section is None or section is LEDSection.ALL:
            return None
        return section

    @staticmethod
    def _target_name(section: LEDSection | None) -> str:
        return section.value if section is not None else LEDSection.ALL.value

    # =================================================================
    # Audio and scenes
    # =================================================================

    def play_sound(self, sound: AudioFile) -> asyncio.Task:
        """
        Play a sound, or stop it if it is already the one playing.

        If the device rejects the play, playback is cleared, but only while
        the failed sound is still the selected one.
        """
        if self._playback.is_playing(sound):
            logger.debug(f"{sound.file_name} already playing, toggling to stop")
            return self.stop_sound()

        self._playback.start(sound)
        logger.debug(f"Playing {sound.file_name}")

        def rollback() -> None:
            if self._playback.clear_if(sound):
                logger.info(f"Playback of {sound.file_name} rolled back")

        return self._dispatch(
            "play_sound",
            sound.file_name,
            lambda: self._api.play_sound(sound.file_name),
            on_failure=rollback,
        )

    def stop_sound(self) -> asyncio.Task:
        """Stop playback locally and on the device."""
        previous = self._playback.clear()
        logger.debug(f"Stopping {previous.file_name if previous else 'playback'}")
        return self._dispatch("stop_sound", None, self._api.stop_sound)

    def play_scene(self, name: str) -> asyncio.Task:
        """Start a named light/sound scene. No local state is kept."""
        logger.debug(f"Playing scene {name}")
        return self._dispatch("play_scene", name, lambda: self._api.play_scene(name))

    # =================================================================
    # Dispatch
    # =================================================================

    def _dispatch(
        self,
        operation: str,
        target: str | None,
        call: Callable[[], Awaitable[None]],
        on_failure: Callable[[], None] | None = None,
    ) -> asyncio.Task:
        task_name = f"{operation}:{target}" if target else operation
        return self._spawn(self._run_command(operation, target, call, on_failure), task_name)

    async def _run_command(
        self,
        operation: str,
        target: str | None,
        call: Callable[[], Awaitable[None]],
        on_failure: Callable[[], None] | None = None,
    ) -> bool:
        """
        Await one device call and report its outcome.

        Returns:
            True if the device accepted the command
        """
        error: RemoteError | None = None
        try:
            await call()
        except RemoteError as e:
            logger.warning(f"{operation} failed: {e.technical_message}")
            error = e
        except TardisRemoteError as e:
            logger.warning(f"{operation} failed: {e.technical_message}")
            error = wrap_transport_error(e, operation, target=target)
        except Exception as e:
            logger.error(f"Unexpected error in {operation}: {e}", exc_info=True)
            error = wrap_transport_error(e, operation, target=target)

        if error is not None:
            if on_failure is not None:
                on_failure()
            self._observers.notify("on_command_event", CommandEvent.FAILED, operation, target, error)
            return False

        logger.info(f"{operation} ({target or 'all'}) accepted")
        self._observers.notify("on_command_event", CommandEvent.SUCCEEDED, operation, target)
        return True
