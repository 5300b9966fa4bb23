"""Cancellable once-per-interval tick sources for the session controller.

The controller never owns a timer directly; it calls ``start(callback)`` when
a session begins running and ``stop()`` on pause, reset, completion and
shutdown.  ``stop()`` takes effect immediately: no callback fires after it
returns, even if the underlying task has not been torn down yet.

Implementations:
    AsyncioTickScheduler: repeating task on an asyncio event loop
    ManualTickScheduler:  driven by explicit ``fire()`` calls (tests, CLIs)
"""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger("gymbaazi.workouts.ticker")

TickCallback = Callable[[], None]


class TickScheduler(ABC):
    """A repeating, cancellable tick source."""

    @abstractmethod
    def start(self, callback: TickCallback) -> None:
        """Begin invoking ``callback`` once per interval.  Restarts if already running."""

    @abstractmethod
    def stop(self) -> None:
        """Stop ticking.  Idempotent."""

    @property
    @abstractmethod
    def is_running(self) -> bool:
        ...


def _on_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


class AsyncioTickScheduler(TickScheduler):
    """Tick from a task on an asyncio event loop.

    Ticks are scheduled against the loop clock (``start + n * interval``) so
    slow callbacks do not accumulate drift.  ``start``/``stop`` may be called
    from the loop thread or from worker threads.

    Args:
        interval_seconds: Seconds between ticks.
        loop:             Loop to run on.  Defaults to the loop running when
                          ``start`` is first called.
    """

    def __init__(
        self,
        interval_seconds: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self._loop = loop
        self._task: asyncio.Task | None = None
        self._generation = 0
        self._running = False
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._running

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            try:
                self._loop = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise RuntimeError(
                    "AsyncioTickScheduler needs a running event loop or an explicit loop"
                ) from exc
        return self._loop

    def start(self, callback: TickCallback) -> None:
        loop = self._resolve_loop()
        with self._lock:
            self._generation += 1
            generation = self._generation
            previous, self._task = self._task, None
            self._running = True
        self._cancel(previous)

        def _spawn() -> None:
            if generation != self._generation:
                return
            self._task = loop.create_task(self._run(callback, generation))

        if _on_loop_thread(loop):
            _spawn()
        else:
            loop.call_soon_threadsafe(_spawn)
        logger.debug("Tick scheduler started (every %.2fs)", self.interval_seconds)

    def stop(self) -> None:
        with self._lock:
            self._generation += 1
            task, self._task = self._task, None
            was_running, self._running = self._running, False
        self._cancel(task)
        if was_running:
            logger.debug("Tick scheduler stopped")

    def _cancel(self, task: asyncio.Task | None) -> None:
        if task is None or task.done():
            return
        loop = task.get_loop()
        if _on_loop_thread(loop):
            task.cancel()
        elif not loop.is_closed():
            loop.call_soon_threadsafe(task.cancel)

    async def _run(self, callback: TickCallback, generation: int) -> None:
        loop = asyncio.get_running_loop()
        next_at = loop.time() + self.interval_seconds
        while True:
            await asyncio.sleep(max(0.0, next_at - loop.time()))
            if generation != self._generation:
                return
            try:
                callback()
            except Exception:
                logger.exception("Tick callback raised")
            next_at += self.interval_seconds


class ManualTickScheduler(TickScheduler):
    """Tick source advanced by hand.

    ``fire(n)`` delivers ``n`` ticks if started; it is a no-op otherwise,
    mirroring a real timer that has been cancelled.
    """

    def __init__(self) -> None:
        self._callback: TickCallback | None = None
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_running(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self.start_count += 1

    def stop(self) -> None:
        if self._callback is not None:
            self.stop_count += 1
        self._callback = None

    def fire(self, count: int = 1) -> int:
        """Deliver ``count`` ticks.  Returns how many were delivered."""
        delivered = 0
        for _ in range(count):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered
