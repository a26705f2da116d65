"""Last-write-wins debounce for pipeline recomputation.

Each :meth:`Debouncer.schedule` call bumps a generation counter and cancels
the pending task.  A task only runs its callback if its generation is still
current when the delay elapses, so at most the most recent request executes.
"""
from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesce bursts of change notifications into one callback run."""

    def __init__(self, callback: Callable[[], Any], delay_s: float = 0.3) -> None:
        if delay_s < 0:
            raise ValueError("delay_s must be non-negative")
        self._callback = callback
        self.delay_s = delay_s
        self._generation = 0
        self._task: asyncio.Task | None = None
        self.runs = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self) -> asyncio.Task:
        """Schedule a run, replacing any pending one.  Needs a running loop."""
        loop = asyncio.get_running_loop()
        self._generation += 1
        if self.pending:
            self._task.cancel()
        self._task = loop.create_task(self._run(self._generation))
        return self._task

    def cancel(self) -> None:
        """Drop any pending run."""
        self._generation += 1
        if self.pending:
            self._task.cancel()
        self._task = None

    async def wait(self) -> None:
        """Wait for the pending run, if any, to finish."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def _run(self, generation: int) -> None:
        await asyncio.sleep(self.delay_s)
        if generation != self._generation:
            logger.debug("Skipping stale recompute generation %d", generation)
            return
        result = self._callback()
        if inspect.isawaitable(result):
            await result
        self.runs += 1
