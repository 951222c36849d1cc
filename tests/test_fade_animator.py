"""Tests for the cancellable opacity fade."""

import asyncio

import pytest

from tardisremote.core import FadeAnimator
from tardisremote.models import FadeDirection, FadeState
from tardisremote.protocols import FadeEvent


def _steps(observer) -> list[float]:
    return [opacity for event, opacity in observer.fade_events if event is FadeEvent.STEP]


@pytest.mark.unit
@pytest.mark.asyncio
class TestFadeCompletion:
    """Test fades that run to the end."""

    async def test_fade_in_ends_at_one(self):
        """fade_in snaps to exactly 1.0."""
        animator = FadeAnimator(frame_rate=100, initial_opacity=0.0)

        task = animator.fade_in(0.1)

        assert task.steps == 10
        assert task.direction is FadeDirection.IN
        assert await task.wait() is FadeState.COMPLETED
        assert animator.opacity == 1.0
        assert not animator.is_running

    async def test_fade_out_decays_monotonically(self, observer):
        """fade_out from 0.5 never rises and ends at exactly 0.0."""
        animator = FadeAnimator(frame_rate=100, initial_opacity=0.5)
        animator.register_observer(observer)

        task = animator.fade_out(0.1)
        assert task.start_opacity == 0.5
        await task.wait()

        values = _steps(observer)
        assert len(values) == 10
        assert values[0] <= 0.5
        assert all(later <= earlier for earlier, later in zip(values, values[1:]))
        assert animator.opacity == 0.0

    async def test_zero_duration_completes_immediately(self):
        """A zero-step fade snaps without waiting."""
        animator = FadeAnimator(frame_rate=60, initial_opacity=0.0)

        task = animator.fade_in(0.0)

        assert task.steps == 0
        assert task.state is FadeState.COMPLETED
        assert animator.opacity == 1.0
        assert await task.wait() is FadeState.COMPLETED

    async def test_events(self, observer):
        """Observers see STARTED, the steps and COMPLETED."""
        animator = FadeAnimator(frame_rate=100, initial_opacity=1.0)
        animator.register_observer(observer)

        await animator.fade_out(0.03).wait()

        events = [event for event, _ in observer.fade_events]
        assert events[0] is FadeEvent.STARTED
        assert events[-1] is FadeEvent.COMPLETED
        assert events.count(FadeEvent.STEP) == 3

    async def test_negative_duration_rejected(self):
        """Test that invalid durations leave the running fade alone."""
        animator = FadeAnimator(frame_rate=100)
        task = animator.fade_out(0.1)

        with pytest.raises(ValueError):
            animator.fade_in(-1.0)

        assert animator.current_task is task
        assert await task.wait() is FadeState.COMPLETED


@pytest.mark.unit
@pytest.mark.asyncio
class TestFadeCancellation:
    """Test cancellation and replacement."""

    async def test_restart_cancels_previous(self, observer):
        """fade_in twice: the first is cancelled, exactly one completes."""
        animator = FadeAnimator(frame_rate=30, initial_opacity=0.0)
        animator.register_observer(observer)

        first = animator.fade_in(1.0)
        second = animator.fade_in(1.0)

        assert first.state is FadeState.CANCELLED
        assert animator.current_task is second
        assert await first.wait() is FadeState.CANCELLED
        assert await second.wait() is FadeState.COMPLETED

        # Only the second run wrote values, so nothing exceeds its own curve
        expected = [step / second.steps for step in range(1, second.steps + 1)]
        assert _steps(observer) == pytest.approx(expected)
        assert animator.opacity == 1.0

    async def test_cancel_freezes_opacity(self):
        """A cancelled fade writes nothing after the cancel."""
        animator = FadeAnimator(frame_rate=100, initial_opacity=0.0)
        task = animator.fade_in(1.0)
        await asyncio.sleep(0.05)

        animator.cancel()
        frozen = animator.opacity

        assert await task.wait() is FadeState.CANCELLED
        await asyncio.sleep(0.03)
        assert animator.opacity == frozen
        assert 0.0 <= frozen < 1.0
        assert not animator.is_running

    async def test_fade_out_starts_from_interrupted_value(self):
        """fade_out captures the opacity the cancelled fade left behind."""
        animator = FadeAnimator(frame_rate=100, initial_opacity=0.0)
        animator.fade_in(1.0)
        await asyncio.sleep(0.05)

        out = animator.fade_out(0.05)

        assert out.start_opacity == animator.opacity
        assert out.start_opacity < 1.0
        await out.wait()
        assert animator.opacity == 0.0

    async def test_close_waits_for_loop(self):
        """close() cancels the fade and returns once its loop has exited."""
        animator = FadeAnimator(frame_rate=100)
        task = animator.fade_out(1.0)

        await animator.close()

        assert task.done
        assert task.state is FadeState.CANCELLED


@pytest.mark.unit
def test_invalid_frame_rate():
    """Test that the frame rate must be positive."""
    with pytest.raises(ValueError):
        FadeAnimator(frame_rate=0)
