"""Tests for the sliding-window rate limiter."""

from __future__ import annotations

import pytest

from gymbaazi.catalog import rate_limiter as rate_limiter_module
from gymbaazi.catalog.rate_limiter import SlidingWindowRateLimiter


@pytest.fixture
def limiter(fake_time) -> SlidingWindowRateLimiter:
    return SlidingWindowRateLimiter(max_requests=2, window_seconds=60, clock=fake_time)


class TestSlidingWindow:
    def test_fresh_limiter_has_room(self, limiter: SlidingWindowRateLimiter) -> None:
        assert limiter.can_proceed
        assert limiter.remaining == 2
        assert limiter.time_until_next_slot is None

    def test_full_window_blocks(self, limiter, fake_time) -> None:
        limiter.record()
        fake_time.advance(10)
        limiter.record()
        assert not limiter.can_proceed
        assert limiter.remaining == 0
        assert limiter.time_until_next_slot == pytest.approx(50)

    def test_oldest_request_slides_out(self, limiter, fake_time) -> None:
        limiter.record()
        fake_time.advance(10)
        limiter.record()
        fake_time.advance(50)
        assert limiter.can_proceed
        assert limiter.remaining == 1

    def test_reset(self, limiter) -> None:
        limiter.record()
        limiter.record()
        limiter.reset()
        assert limiter.remaining == 2

    def test_rejects_zero_capacity(self) -> None:
        with pytest.raises(ValueError):
            SlidingWindowRateLimiter(max_requests=0)


class TestWaitAndRecord:
    @pytest.mark.asyncio
    async def test_claims_free_slot_without_sleeping(self, limiter, monkeypatch) -> None:
        sleeps: list[float] = []

        async def fake_sleep(delay: float) -> None:
            sleeps.append(delay)

        monkeypatch.setattr(rate_limiter_module.asyncio, "sleep", fake_sleep)
        await limiter.wait_and_record()
        assert sleeps == []
        assert limiter.remaining == 1

    @pytest.mark.asyncio
    async def test_waits_for_slot(self, limiter, fake_time, monkeypatch) -> None:
        sleeps: list[float] = []

        async def fake_sleep(delay: float) -> None:
            sleeps.append(delay)
            fake_time.advance(delay)

        monkeypatch.setattr(rate_limiter_module.asyncio, "sleep", fake_sleep)
        limiter.record()
        limiter.record()
        start = fake_time()

        await limiter.wait_and_record()

        assert sleeps
        assert max(sleeps) <= 0.5
        assert fake_time() - start == pytest.approx(60)
        assert limiter.remaining == 1
