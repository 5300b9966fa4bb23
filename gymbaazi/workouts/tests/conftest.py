"""Shared fixtures for the workout core tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any

import pytest

from gymbaazi.services.storage import MemoryStore
from gymbaazi.workouts.base import (
    CustomWorkoutDay,
    Exercise,
    ScheduleDefinition,
    SessionLog,
    SetRecord,
    WorkoutDayAssignment,
    WorkoutType,
)
from gymbaazi.workouts.config_loader import WorkoutConfig, load_workout_config
from gymbaazi.workouts.errors import PersistenceError
from gymbaazi.workouts.repository import WorkoutRepository
from gymbaazi.workouts.session import SessionController
from gymbaazi.workouts.ticker import ManualTickScheduler

# 2026-03-02 is a Monday (LEGS in the stock rotation)
TEST_MONDAY = date(2026, 3, 2)
TEST_NOW = datetime(2026, 3, 2, 18, 30, 0)


class FakeClock:
    """Settable wall clock for the session controller."""

    def __init__(self, now: datetime = TEST_NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now += timedelta(seconds=seconds)
        return self.now


class FlakyStore(MemoryStore):
    """MemoryStore whose writes fail while ``failing`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = False
        self.failed_writes = 0

    def set(self, key: str, value: Any) -> None:
        if self.failing:
            self.failed_writes += 1
            raise PersistenceError(key, "disk full")
        super().set(key, value)


def make_log(day: date, completed: bool = True, **kwargs: Any) -> SessionLog:
    return SessionLog(
        date=day,
        workout_type=kwargs.pop("workout_type", WorkoutType.PUSH),
        day_name=kwargs.pop("day_name", "Push Day"),
        completed=completed,
        **kwargs,
    )


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def workout_config() -> WorkoutConfig:
    """Load the real bundled config for tests."""
    return load_workout_config()


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def assignment() -> WorkoutDayAssignment:
    """Three exercises with 4, 4 and 3 target sets (11 sets total)."""
    return WorkoutDayAssignment(
        identifier="PUSH",
        label="Push Day",
        workout_type=WorkoutType.PUSH,
        exercises=[
            Exercise(id="bench", name="Bench Press", sets=4, reps="6-8", is_compound=True),
            Exercise(id="ohp", name="Overhead Press", sets=4, reps="8-10", is_compound=True),
            Exercise(id="raise", name="Lateral Raises", sets=3, reps="12 each"),
        ],
    )


@pytest.fixture
def empty_schedule() -> ScheduleDefinition:
    return ScheduleDefinition()


@pytest.fixture
def custom_schedule() -> ScheduleDefinition:
    """Custom days on Monday and Sunday; the rest falls back to the rotation."""
    return ScheduleDefinition(
        days=[
            CustomWorkoutDay(
                name="Chest & Arms",
                day_of_week=0,
                exercises=[Exercise(id="dips", name="Dips", sets=3, reps="10")],
            ),
            CustomWorkoutDay(
                name="Sunday Pump",
                day_of_week=6,
                exercises=[Exercise(id="curl", name="Curls", sets=2, reps="12")],
            ),
        ]
    )


@pytest.fixture
def sample_log() -> SessionLog:
    return make_log(
        TEST_MONDAY,
        duration_seconds=3125,
        sets=[
            SetRecord("bench", "Bench Press", 1, "6-8", 7, 60.0, True, id="s1"),
            SetRecord("bench", "Bench Press", 2, "6-8", 6, 62.5, True, id="s2"),
            SetRecord("ohp", "Overhead Press", 1, "8-10", 9, 40.0, False, id="s3"),
        ],
    )


# ---------------------------------------------------------------------------
# Controller fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()


@pytest.fixture
def repository(store: FlakyStore) -> WorkoutRepository:
    return WorkoutRepository(store)


@pytest.fixture
def ticker() -> ManualTickScheduler:
    return ManualTickScheduler()


@pytest.fixture
def controller(
    repository: WorkoutRepository,
    ticker: ManualTickScheduler,
    clock: FakeClock,
    workout_config: WorkoutConfig,
) -> SessionController:
    return SessionController(repository, ticker=ticker, clock=clock, config=workout_config)
