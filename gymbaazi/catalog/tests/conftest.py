"""Shared fixtures and mock API responses for exercise catalog tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from gymbaazi.catalog.cache import DiskCache
from gymbaazi.catalog.exercisedb import ExerciseDBClient
from gymbaazi.catalog.rate_limiter import SlidingWindowRateLimiter
from gymbaazi.workouts.config_loader import CatalogConfig

BASE_URL = "https://exercisedb.test/api/v1"


class FakeTime:
    """Settable clock returning seconds."""

    def __init__(self, start: float = 1_000_000.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


def exercise_payload(exercise_id: str = "0001", name: str = "barbell bench press") -> dict:
    return {
        "exerciseId": exercise_id,
        "name": name,
        "gifUrl": f"https://static.exercisedb.test/{exercise_id}.gif",
        "targetMuscles": ["pectorals"],
        "secondaryMuscles": ["triceps", "delts"],
        "bodyParts": ["chest"],
        "equipments": ["barbell"],
        "instructions": ["Lie on the bench.", "Press the bar up."],
    }


def page_payload(count: int = 2, total: int = 120) -> dict:
    return {
        "success": True,
        "metadata": {
            "totalExercises": total,
            "totalPages": (total + 24) // 25,
            "currentPage": 1,
            "previousPage": None,
            "nextPage": f"{BASE_URL}/exercises?offset=25&limit=25",
        },
        "data": [exercise_payload(f"{i:04d}", f"exercise {i}") for i in range(count)],
    }


# ---------------------------------------------------------------------------
# Config / clock fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def catalog_config() -> CatalogConfig:
    return CatalogConfig(base_url=BASE_URL, timeout_seconds=5.0)


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def disk_cache(tmp_path: Path, fake_time: FakeTime) -> DiskCache:
    return DiskCache(tmp_path / "cache", clock=fake_time)


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------


class RecordingHandler:
    """httpx.MockTransport handler returning queued responses and logging requests."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.responder: Callable[[httpx.Request], httpx.Response] = lambda r: httpx.Response(
            200, json=page_payload()
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def http_client(handler: RecordingHandler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def client(
    catalog_config: CatalogConfig,
    disk_cache: DiskCache,
    http_client: httpx.AsyncClient,
    fake_time: FakeTime,
) -> ExerciseDBClient:
    """ExerciseDB client with a mocked transport and a roomy rate limiter."""
    return ExerciseDBClient(
        config=catalog_config,
        cache=disk_cache,
        rate_limiter=SlidingWindowRateLimiter(1000, 60, clock=fake_time),
        http_client=http_client,
    )
