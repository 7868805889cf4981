"""Cancellable-timer debouncing for bursty input streams."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class Debouncer(Generic[T, R]):
    """Run ``func`` on the latest submitted value after a quiet period.

    Each ``submit`` schedules a timer and cancels the previous one if it has
    not fired yet, so a burst of inputs within ``wait_seconds`` results in a
    single call carrying the final value. ``func`` may be a coroutine
    function. A computation that already started is not interrupted by a new
    submission; ``close`` stops those as well.
    """

    def __init__(
        self,
        func: Callable[[T], R | Awaitable[R]],
        wait_seconds: float,
        *,
        on_result: Callable[[R], Awaitable[None]] | None = None,
    ) -> None:
        if wait_seconds < 0:
            raise ValueError("wait_seconds must be >= 0")
        self._func = func
        self._wait = wait_seconds
        self._on_result = on_result
        self._pending: asyncio.Task[R] | None = None
        self._timer_running = False
        self._tasks: set[asyncio.Task[R]] = set()

    @property
    def pending(self) -> bool:
        return self._pending is not None and self._timer_running

    @property
    def in_flight(self) -> int:
        """Number of submitted calls that have not finished yet."""

        return len(self._tasks)

    def submit(self, value: T) -> asyncio.Task[R]:
        self.cancel()
        self._timer_running = True
        task = asyncio.create_task(self._fire(value))
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        self._pending = task
        return task

    def cancel(self) -> None:
        """Drop the pending timer, if it has not fired yet."""

        if self._pending is not None and self._timer_running:
            self._pending.cancel()
            logger.debug("Cancelled pending debounced call")
        self._pending = None
        self._timer_running = False

    async def close(self) -> None:
        """Cancel every submitted call, including ones already running."""

        self._pending = None
        self._timer_running = False
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.debug("Closed debouncer with %d unfinished calls", len(tasks))

    def _on_done(self, task: asyncio.Task[R]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Debounced call failed", exc_info=exc)

    async def _fire(self, value: T) -> R:
        await asyncio.sleep(self._wait)
        if self._pending is asyncio.current_task():
            self._timer_running = False
        result = self._func(value)
        if inspect.isawaitable(result):
            result = await result
        if self._on_result is not None:
            await self._on_result(result)
        return result
