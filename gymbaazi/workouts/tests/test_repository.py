"""Tests for the typed repository over the key/value stores."""

from __future__ import annotations

import uuid
from datetime import date, timedelta
from pathlib import Path

import pytest

from gymbaazi.services.storage import JsonFileStore
from gymbaazi.workouts.base import (
    CustomWorkoutDay,
    Exercise,
    UserProfile,
    UserSettings,
    WeightUnit,
    WorkoutType,
)
from gymbaazi.workouts.errors import NotFoundError
from gymbaazi.workouts.repository import KEY_HISTORY, KEY_PROFILE, WorkoutRepository
from gymbaazi.workouts.tests.conftest import TEST_MONDAY, make_log


class TestProfileAndOnboarding:
    def test_fresh_repository(self, repository: WorkoutRepository) -> None:
        assert repository.is_onboarded() is False
        assert repository.get_profile() is None

    def test_complete_onboarding(self, repository: WorkoutRepository) -> None:
        profile = UserProfile(name="Ravi", age=29, height_cm=175.0, weight_kg=72.5)
        repository.complete_onboarding(profile)
        assert repository.is_onboarded() is True
        stored = repository.get_profile()
        assert stored.id == profile.id
        assert stored.weight_kg == 72.5

    def test_update_profile_patches_fields(self, repository: WorkoutRepository) -> None:
        repository.save_profile(UserProfile(name="Ravi", age=29, height_cm=175.0, weight_kg=72.5))
        updated = repository.update_profile(weight_kg=70.0)
        assert updated.weight_kg == 70.0
        assert repository.get_profile().name == "Ravi"

    def test_update_without_profile(self, repository: WorkoutRepository) -> None:
        assert repository.update_profile(name="Nobody") is None

    def test_undecodable_profile_is_treated_as_missing(self, repository, store) -> None:
        store.set(KEY_PROFILE, {"unexpected": True})
        assert repository.get_profile() is None


class TestSettings:
    def test_defaults_when_missing(self, repository: WorkoutRepository) -> None:
        settings = repository.get_settings()
        assert settings.weight_unit is WeightUnit.KG
        assert settings.dark_mode_override is None

    def test_round_trip(self, repository: WorkoutRepository) -> None:
        repository.save_settings(UserSettings(haptic_feedback=False, weight_unit=WeightUnit.LBS))
        settings = repository.get_settings()
        assert settings.haptic_feedback is False
        assert settings.weight_unit is WeightUnit.LBS


class TestSchedule:
    def test_add_update_delete_day(self, repository: WorkoutRepository) -> None:
        day = CustomWorkoutDay(name="Arms", day_of_week=3)
        repository.add_workout_day(day)
        assert repository.get_schedule().workout_for(3).name == "Arms"

        day.name = "Big Arms"
        day.day_of_week = 4
        repository.update_workout_day(day)
        schedule = repository.get_schedule()
        assert schedule.workout_for(3) is None
        assert schedule.workout_for(4).name == "Big Arms"

        assert repository.delete_workout_day(day.id) is True
        assert repository.get_schedule().days == []

    def test_update_missing_day(self, repository: WorkoutRepository) -> None:
        with pytest.raises(NotFoundError):
            repository.update_workout_day(CustomWorkoutDay(name="Ghost"))

    def test_delete_missing_day(self, repository: WorkoutRepository) -> None:
        assert repository.delete_workout_day(uuid.uuid4()) is False


class TestRoutines:
    def test_default_until_edited(self, repository: WorkoutRepository) -> None:
        routine = repository.get_routine(WorkoutType.PUSH)
        assert routine.title == "Push Day"
        assert len(routine.exercises) == 6

    def test_add_exercise_creates_override(self, repository: WorkoutRepository) -> None:
        repository.add_exercise_to_routine(
            WorkoutType.PUSH, Exercise(id="dips", name="Dips", sets=3, reps="8-12")
        )
        routine = repository.get_routine(WorkoutType.PUSH)
        assert [e.id for e in routine.exercises][-1] == "dips"
        assert len(repository.get_routines()[WorkoutType.PUSH].exercises) == 7

    def test_reset_routine(self, repository: WorkoutRepository) -> None:
        repository.remove_exercise_from_routine(WorkoutType.PULL, 0)
        assert repository.get_routine(WorkoutType.PULL).exercises[0].id == "pull_2"
        restored = repository.reset_routine(WorkoutType.PULL)
        assert restored.exercises[0].id == "pull_1"
        assert repository.get_routine(WorkoutType.PULL).exercises[0].id == "pull_1"

    def test_remove_out_of_range(self, repository: WorkoutRepository) -> None:
        with pytest.raises(NotFoundError):
            repository.remove_exercise_from_routine(WorkoutType.LEGS, 7)

    def test_move_exercise(self, repository: WorkoutRepository) -> None:
        routine = repository.move_exercise_in_routine(WorkoutType.LEGS, 0, 2)
        assert [e.id for e in routine.exercises][:3] == ["legs_2", "legs_3", "legs_1"]

    def test_move_clamps_destination(self, repository: WorkoutRepository) -> None:
        routine = repository.move_exercise_in_routine(WorkoutType.LEGS, 0, 50)
        assert routine.exercises[-1].id == "legs_1"


class TestHistory:
    def test_same_day_replaces(self, repository: WorkoutRepository) -> None:
        repository.save_workout_log(make_log(TEST_MONDAY, duration_seconds=100))
        repository.save_workout_log(make_log(TEST_MONDAY, duration_seconds=200))
        logs = repository.list_workout_logs()
        assert len(logs) == 1
        assert logs[0].duration_seconds == 200

    def test_newest_first(self, repository: WorkoutRepository) -> None:
        for offset in (3, 0, 7):
            repository.save_workout_log(make_log(TEST_MONDAY - timedelta(days=offset)))
        dates = [log.date for log in repository.list_workout_logs()]
        assert dates == sorted(dates, reverse=True)

    def test_range_is_inclusive(self, repository: WorkoutRepository) -> None:
        for offset in range(5):
            repository.save_workout_log(make_log(TEST_MONDAY - timedelta(days=offset)))
        logs = repository.get_workout_logs(TEST_MONDAY - timedelta(days=3), TEST_MONDAY - timedelta(days=1))
        assert [log.date.day for log in logs] == [1, 28, 27]

    def test_delete_by_id(self, repository: WorkoutRepository) -> None:
        log = make_log(TEST_MONDAY)
        repository.save_workout_log(log)
        assert repository.delete_workout_log(uuid.uuid4()) is False
        assert repository.delete_workout_log(log.id) is True
        assert repository.get_workout_log(TEST_MONDAY) is None

    def test_log_round_trip_is_exact(self, repository, sample_log) -> None:
        repository.save_workout_log(sample_log)
        assert repository.get_workout_log(TEST_MONDAY).to_dict() == sample_log.to_dict()

    def test_log_round_trip_through_files(self, tmp_path: Path, sample_log) -> None:
        WorkoutRepository(JsonFileStore(tmp_path)).save_workout_log(sample_log)
        reloaded = WorkoutRepository(JsonFileStore(tmp_path)).get_workout_log(TEST_MONDAY)
        assert reloaded == sample_log

    def test_bad_entry_is_skipped(self, repository, store) -> None:
        good = make_log(TEST_MONDAY)
        store.set(
            KEY_HISTORY,
            {TEST_MONDAY.isoformat(): good.to_dict(), "2026-03-01": {"date": "2026-03-01", "sets": "x"}},
        )
        assert list(repository.load_history()) == [TEST_MONDAY]


class TestSnapshotAndReset:
    def test_clear_all(self, repository: WorkoutRepository) -> None:
        repository.set_onboarded(True)
        repository.save_workout_log(make_log(date(2026, 1, 5)))
        repository.clear_all()
        assert repository.is_onboarded() is False
        assert repository.list_workout_logs() == []
        assert repository.store.keys() == []
