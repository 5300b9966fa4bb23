"""Shared fixtures for the HTTP API tests.

Each test gets a fresh app backed by an in-memory store, a hand-driven tick
source, a settable clock and an ExerciseDB client on a mocked transport.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from gymbaazi.catalog.exercisedb import ExerciseDBClient
from gymbaazi.catalog.rate_limiter import SlidingWindowRateLimiter
from gymbaazi.catalog.tests.conftest import BASE_URL, RecordingHandler
from gymbaazi.config import Settings
from gymbaazi.main import create_app
from gymbaazi.services.storage import MemoryStore
from gymbaazi.workouts.config_loader import CatalogConfig
from gymbaazi.workouts.tests.conftest import FakeClock
from gymbaazi.workouts.ticker import ManualTickScheduler

API = "/api/v1"


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        data_dir=str(tmp_path / "data"),
        cache_dir=str(tmp_path / "cache"),
        environment="test",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def ticker() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def catalog_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def catalog(catalog_handler: RecordingHandler) -> ExerciseDBClient:
    return ExerciseDBClient(
        config=CatalogConfig(base_url=BASE_URL),
        rate_limiter=SlidingWindowRateLimiter(1000, 60),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(catalog_handler)),
    )


# ---------------------------------------------------------------------------
# App / client
# ---------------------------------------------------------------------------


@pytest.fixture
def app(
    settings: Settings,
    store: MemoryStore,
    catalog: ExerciseDBClient,
    ticker: ManualTickScheduler,
    clock: FakeClock,
) -> FastAPI:
    return create_app(settings, store=store, catalog=catalog, ticker=ticker, clock=clock)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
