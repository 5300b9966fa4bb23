"""Tests for stock routines, templates and frequency suggestions."""

from __future__ import annotations

import pytest

from gymbaazi.workouts.base import WorkoutType
from gymbaazi.workouts.routines import (
    DEFAULT_ROUTINES,
    FULL_BODY,
    LEG_DAY,
    TEMPLATES,
    default_routine,
    get_template,
    parse_target_reps,
    suggested_schedule,
)


class TestParseTargetReps:
    @pytest.mark.parametrize(
        "reps, expected",
        [("8-10", 9), ("6-8", 7), ("5-6", 5), ("12", 12), ("12 each", 10), ("AMRAP", 10), ("", 10)],
    )
    def test_seed_values(self, reps: str, expected: int) -> None:
        assert parse_target_reps(reps) == expected

    def test_custom_default(self) -> None:
        assert parse_target_reps("to failure", default=8) == 8


class TestDefaultRoutines:
    def test_every_rotation_category_has_a_routine(self) -> None:
        assert set(DEFAULT_ROUTINES) == {
            WorkoutType.PUSH,
            WorkoutType.PULL,
            WorkoutType.LEGS,
            WorkoutType.REST,
        }

    def test_exercise_ids_are_unique(self) -> None:
        ids = [e.id for r in DEFAULT_ROUTINES.values() for e in r.exercises]
        assert len(ids) == len(set(ids))

    def test_rest_has_no_exercises(self) -> None:
        assert DEFAULT_ROUTINES[WorkoutType.REST].exercises == []

    def test_default_routine_is_a_copy(self) -> None:
        routine = default_routine(WorkoutType.PULL)
        routine.exercises.pop()
        assert len(DEFAULT_ROUTINES[WorkoutType.PULL].exercises) == 7

    def test_no_stock_custom_routine(self) -> None:
        with pytest.raises(KeyError):
            default_routine(WorkoutType.CUSTOM)


class TestTemplates:
    def test_registry_lookup(self) -> None:
        assert get_template("legs") is LEG_DAY
        assert len(TEMPLATES) == 6

    def test_unknown_template(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_template("arms")

    def test_to_custom_day(self) -> None:
        day = LEG_DAY.to_custom_day(day_of_week=3)
        assert day.name == "Leg Day"
        assert day.scheduled_day_name == "Thu"
        squat = day.exercises[0]
        assert squat.is_compound and squat.rest_seconds == 150
        lunges = day.exercises[3]
        assert not lunges.is_compound and lunges.rest_time == "60-90 sec"

    def test_template_days_get_fresh_exercise_ids(self) -> None:
        first = FULL_BODY.to_custom_day()
        second = FULL_BODY.to_custom_day()
        assert first.id != second.id
        assert {e.id for e in first.exercises}.isdisjoint(e.id for e in second.exercises)


class TestSuggestions:
    @pytest.mark.parametrize("days", range(1, 8))
    def test_day_counts(self, days: int) -> None:
        suggestions = suggested_schedule(days)
        assert len(suggestions) == min(days, 6)
        weekdays = [s.day_of_week for s in suggestions]
        assert len(weekdays) == len(set(weekdays))

    def test_three_days_is_ppl(self) -> None:
        suggestions = suggested_schedule(3)
        assert [(s.day_name, s.template.id) for s in suggestions] == [
            ("Mon", "push"),
            ("Wed", "pull"),
            ("Fri", "legs"),
        ]

    def test_suggestion_becomes_scheduled_day(self) -> None:
        day = suggested_schedule(3)[2].to_custom_day()
        assert day.day_of_week == 4
        assert day.name == "Leg Day"
        assert day.exercises[0].name == "Squat"

    def test_out_of_range(self) -> None:
        assert suggested_schedule(0) == []
        assert suggested_schedule(8) == []

    def test_full_day_name(self) -> None:
        assert suggested_schedule(1)[0].full_day_name == "Wednesday"
