"""Playback state: which sound the core believes the device is playing."""

import logging

from tardisremote.models import AudioFile
from tardisremote.protocols import PlaybackEvent, PlaybackObserver
from tardisremote.utils import ObserverManager

logger = logging.getLogger(__name__)


class PlaybackState:
    """
    Tracks the single sound that is playing, if any.

    The device plays one sound at a time, so this holds at most one
    AudioFile. Comparisons go through AudioFile equality (file_name only),
    so a record from a re-fetched catalog still matches the playing one.
    """

    def __init__(self) -> None:
        self._current: AudioFile | None = None
        self._observers = ObserverManager[PlaybackObserver](observer_type_name="playback")

    def register_observer(self, observer: PlaybackObserver) -> None:
        """Register an observer to receive playback changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: PlaybackObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    @property
    def current(self) -> AudioFile | None:
        """The sound believed to be playing, or None."""
        return self._current

    def is_playing(self, sound: AudioFile | None = None) -> bool:
        """
        Check whether anything (or a specific sound) is playing.

        Args:
            sound: If given, check for this sound specifically
        """
        if sound is None:
            return self._current is not None
        return self._current == sound

    def start(self, sound: AudioFile) -> None:
        """Mark a sound as playing."""
        self._current = sound
        logger.debug(f"Playback set to {sound.file_name}")
        self._observers.notify("on_playback_event", PlaybackEvent.STARTED, sound)

    def clear(self) -> AudioFile | None:
        """
        Mark playback as stopped.

        Returns:
            The sound that was playing, or None
        """
        previous = self._current
        self._current = None
        if previous is not None:
            logger.debug(f"Playback cleared (was {previous.file_name})")
        self._observers.notify("on_playback_event", PlaybackEvent.STOPPED, previous)
        return previous

    def clear_if(self, sound: AudioFile) -> bool:
        """
        Clear playback only if it still refers to the given sound.

        Used to roll back a failed play without wiping a newer selection.

        Returns:
            True if playback was cleared
        """
        if self._current == sound:
            self.clear()
            return True
        return False
