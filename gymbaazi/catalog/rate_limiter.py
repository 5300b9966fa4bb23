"""Sliding-window request limiter for the exercise catalog client."""

from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import Callable

logger = logging.getLogger("gymbaazi.catalog.rate_limiter")

# Longest single sleep while waiting for a slot, so cancellation is prompt
_MAX_WAIT_STEP = 0.5


class SlidingWindowRateLimiter:
    """Allow at most ``max_requests`` in any ``window_seconds`` span.

    Args:
        max_requests:   Requests allowed per window.
        window_seconds: Window length.
        clock:          Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        max_requests: int = 100,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._timestamps: deque[float] = deque()

    def _prune(self) -> None:
        cutoff = self._clock() - self.window_seconds
        while self._timestamps and self._timestamps[0] <= cutoff:
            self._timestamps.popleft()

    @property
    def can_proceed(self) -> bool:
        self._prune()
        return len(self._timestamps) < self.max_requests

    @property
    def remaining(self) -> int:
        self._prune()
        return max(0, self.max_requests - len(self._timestamps))

    @property
    def time_until_next_slot(self) -> float | None:
        """Seconds until a slot frees up, or None if one is free now."""
        if self.can_proceed:
            return None
        return max(0.0, self.window_seconds - (self._clock() - self._timestamps[0]))

    def record(self) -> None:
        self._timestamps.append(self._clock())
        logger.debug("Rate limiter: %d/%d remaining", self.remaining, self.max_requests)

    async def wait_and_record(self) -> None:
        """Sleep until a slot is free, then claim it."""
        while not self.can_proceed:
            wait = self.time_until_next_slot
            if wait is None:
                break
            logger.debug("Rate limiter: waiting %.1fs", wait)
            await asyncio.sleep(min(wait, _MAX_WAIT_STEP))
        self.record()

    def reset(self) -> None:
        self._timestamps.clear()
