"""Tracking of fire-and-forget command tasks."""

import asyncio
import contextlib
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)


class TaskTracker:
    """
    Keeps references to in-flight tasks so they are not garbage collected
    and so the host can wait for them to drain.

    Finished tasks remove themselves. A task that ends with an exception
    has it logged here; the dispatcher normally catches everything before
    that point.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()

    def spawn(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """
        Schedule a coroutine on the running loop and track it.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"Task {task.get_name()} failed: {error}", exc_info=error)

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    async def wait_idle(self, timeout: float | None = None) -> bool:
        """
        Wait until every tracked task has finished.

        Tasks spawned while waiting are waited for as well.

        Args:
            timeout: Maximum seconds to wait, or None for no limit

        Returns:
            True if all tasks finished, False on timeout
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout

        while self._tasks:
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                logger.warning(f"{len(self._tasks)} task(s) still pending after {timeout}s")
                return False
            await asyncio.wait(set(self._tasks), timeout=remaining)

        return True

    async def cancel_all(self) -> None:
        """Cancel and await every tracked task."""
        tasks = list(self._tasks)
        self._tasks.clear()

        for task in tasks:
            if not task.done():
                task.cancel()

        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.gather(*tasks, return_exceptions=True)

        if tasks:
            logger.debug(f"Cancelled {len(tasks)} pending task(s)")
