"""Single cancellable opacity fade."""

import asyncio
import logging
import math

from tardisremote.models import FadeDirection, FadeState
from tardisremote.protocols import FadeEvent, FadeObserver
from tardisremote.utils import ObserverManager

logger = logging.getLogger(__name__)

DEFAULT_FRAME_RATE = 60


class FadeTask:
    """
    One fade from start to finish.

    A FadeTask is created by FadeAnimator and runs at most once. Cancellation
    is cooperative: cancel() sets a token that the running loop checks once
    per step, so a cancelled task never writes another opacity value.
    """

    def __init__(self, direction: FadeDirection, duration: float, start_opacity: float, steps: int):
        self.direction = direction
        self.duration = duration
        self.start_opacity = start_opacity
        self.steps = steps
        self.state = FadeState.IDLE
        self._cancel_token = asyncio.Event()
        self._finished = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._cancel_token.is_set()

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    def target_at(self, progress: float) -> float:
        """Opacity this fade writes at the given progress (0..1)."""
        if self.direction is FadeDirection.IN:
            return progress
        return self.start_opacity * (1.0 - progress)

    @property
    def end_opacity(self) -> float:
        return 1.0 if self.direction is FadeDirection.IN else 0.0

    def cancel(self) -> None:
        """Request cancellation. Takes effect at the next step boundary."""
        if self.state in (FadeState.COMPLETED, FadeState.CANCELLED):
            return
        self._cancel_token.set()
        self.state = FadeState.CANCELLED

    async def wait(self) -> FadeState:
        """Wait until the fade has finished and return how it ended."""
        await self._finished.wait()
        return self.state

    async def wait_step(self, interval: float) -> bool:
        """
        Sleep for one step unless cancelled first.

        Returns:
            True if the task was cancelled
        """
        try:
            await asyncio.wait_for(self._cancel_token.wait(), timeout=interval)
        except asyncio.TimeoutError:
            pass
        return self._cancel_token.is_set()

    def finish(self, state: FadeState) -> None:
        self.state = state
        self._finished.set()

    def __repr__(self) -> str:
        return (
            f"FadeTask({self.direction.value}, duration={self.duration}, "
            f"steps={self.steps}, state={self.state.value})"
        )


class FadeAnimator:
    """
    Drives the model opacity with at most one fade running at a time.

    Starting a fade cancels the one in progress first. A fade of N steps
    (N = round(duration * frame_rate)) writes one value per 1/frame_rate
    seconds and snaps to exactly 1.0 (fade in) or 0.0 (fade out) when it
    completes normally.
    """

    def __init__(self, frame_rate: int = DEFAULT_FRAME_RATE, initial_opacity: float = 1.0):
        """
        Initialize the animator.

        Args:
            frame_rate: Steps per second
            initial_opacity: Opacity before any fade has run
        """
        if frame_rate <= 0:
            raise ValueError(f"frame_rate must be positive, got {frame_rate}")
        self._frame_rate = frame_rate
        self._opacity = float(initial_opacity)
        self._current: FadeTask | None = None
        self._runners: set[asyncio.Task] = set()
        self._observers = ObserverManager[FadeObserver](observer_type_name="fade")

    def register_observer(self, observer: FadeObserver) -> None:
        """Register an observer to receive opacity changes."""
        self._observers.register(observer)

    def unregister_observer(self, observer: FadeObserver) -> None:
        """Unregister an observer."""
        self._observers.unregister(observer)

    @property
    def opacity(self) -> float:
        return self._opacity

    @property
    def frame_rate(self) -> int:
        return self._frame_rate

    @property
    def current_task(self) -> FadeTask | None:
        return self._current

    @property
    def is_running(self) -> bool:
        return self._current is not None and self._current.state is FadeState.RUNNING

    def fade_in(self, duration: float) -> FadeTask:
        """Fade opacity from 0 up to 1 over `duration` seconds."""
        return self._start(FadeDirection.IN, duration)

    def fade_out(self, duration: float) -> FadeTask:
        """Fade opacity from its current value down to 0 over `duration` seconds."""
        return self._start(FadeDirection.OUT, duration)

    def cancel(self) -> None:
        """Cancel the running fade, if any, without starting another."""
        if self._current is not None and not self._current.done:
            logger.debug(f"Cancelling {self._current}")
            self._current.cancel()

    async def close(self) -> None:
        """Cancel the running fade and wait for its loop to exit."""
        self.cancel()
        if self._runners:
            await asyncio.gather(*self._runners, return_exceptions=True)

    def _steps_for(self, duration: float) -> int:
        if duration < 0 or not math.isfinite(duration):
            raise ValueError(f"Fade duration must be a finite non-negative number, got {duration}")
        return round(duration * self._frame_rate)

    def _start(self, direction: FadeDirection, duration: float) -> FadeTask:
        steps = self._steps_for(duration)
        self.cancel()

        task = FadeTask(direction, duration, start_opacity=self._opacity, steps=steps)
        self._current = task
        logger.debug(f"Starting {task}")

        task.state = FadeState.RUNNING
        self._observers.notify("on_fade_event", FadeEvent.STARTED, self._opacity)

        if steps == 0:
            self._complete(task)
            return task

        runner = asyncio.get_running_loop().create_task(
            self._run(task), name=f"fade-{direction.value}"
        )
        self._runners.add(runner)
        runner.add_done_callback(self._runners.discard)
        return task

    async def _run(self, task: FadeTask) -> None:
        interval = 1.0 / self._frame_rate
        try:
            for step in range(1, task.steps + 1):
                if await task.wait_step(interval):
                    self._abort(task)
                    return
                self._write(task.target_at(step / task.steps))
                self._observers.notify("on_fade_event", FadeEvent.STEP, self._opacity)
        except asyncio.CancelledError:
            self._abort(task)
            raise

        self._complete(task)

    def _write(self, value: float) -> None:
        self._opacity = min(max(value, 0.0), 1.0)

    def _complete(self, task: FadeTask) -> None:
        self._write(task.end_opacity)
        task.finish(FadeState.COMPLETED)
        logger.debug(f"Fade {task.direction.value} completed at opacity {self._opacity}")
        self._observers.notify("on_fade_event", FadeEvent.COMPLETED, self._opacity)

    def _abort(self, task: FadeTask) -> None:
        task.finish(FadeState.CANCELLED)
        logger.debug(f"Fade {task.direction.value} cancelled at opacity {self._opacity}")
        self._observers.notify("on_fade_event", FadeEvent.CANCELLED, self._opacity)
