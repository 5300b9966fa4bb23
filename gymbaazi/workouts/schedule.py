"""Resolve which workout applies to a calendar date.

Resolution order for a date:

1. The first custom day bound to that weekday (list order wins ties).
2. Otherwise the rotation category for the weekday, using the schedule's own
   rotation override when set and the configured PPL rotation otherwise.
   The category's exercises come from ``routines`` (user overrides) with the
   stock routine as fallback.

Everything here is pure: callers pass the schedule and routines in.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, timedelta

from gymbaazi.workouts.base import (
    WEEKDAY_ABBREVIATIONS,
    ScheduleDefinition,
    WorkoutDayAssignment,
    WorkoutRoutine,
    WorkoutType,
)
from gymbaazi.workouts.config_loader import WorkoutConfig, get_workout_config
from gymbaazi.workouts.routines import DEFAULT_ROUTINES

logger = logging.getLogger("gymbaazi.workouts.schedule")


@dataclass
class DailyPlan:
    """One entry of a week or upcoming-days listing."""

    date: date
    day_name: str
    assignment: WorkoutDayAssignment


def rotation_type(
    target_date: date,
    schedule: ScheduleDefinition | None = None,
    config: WorkoutConfig | None = None,
) -> WorkoutType:
    """Rotation category for ``target_date``, ignoring custom days."""
    weekday = target_date.weekday()
    if schedule is not None and schedule.rotation:
        return schedule.rotation.get(weekday, WorkoutType.REST)
    cfg = config or get_workout_config()
    return cfg.workout_type_for_weekday(weekday)


def is_rest_day(
    target_date: date,
    schedule: ScheduleDefinition,
    config: WorkoutConfig | None = None,
) -> bool:
    """True when ``resolve`` would return the REST category for ``target_date``."""
    if schedule.has_workout(target_date.weekday()):
        return False
    return rotation_type(target_date, schedule, config) is WorkoutType.REST


def resolve(
    target_date: date,
    schedule: ScheduleDefinition,
    routines: Mapping[WorkoutType, WorkoutRoutine] | None = None,
    config: WorkoutConfig | None = None,
) -> WorkoutDayAssignment:
    """Return the workout assignment for ``target_date``.

    Args:
        target_date: Calendar day in the user's local time.
        schedule:    Custom days plus optional rotation override.
        routines:    Per-category routine overrides; stock routines fill gaps.
        config:      Workout config (defaults to the global singleton).

    Returns:
        A fresh ``WorkoutDayAssignment``; its exercise list is a copy the
        caller may mutate.
    """
    custom = schedule.workout_for(target_date.weekday())
    if custom is not None:
        return WorkoutDayAssignment(
            identifier=str(custom.id),
            label=custom.name,
            workout_type=WorkoutType.CUSTOM,
            exercises=copy.deepcopy(custom.exercises),
        )

    workout_type = rotation_type(target_date, schedule, config)
    routine = (routines or {}).get(workout_type) or DEFAULT_ROUTINES[workout_type]
    return WorkoutDayAssignment(
        identifier=workout_type.value,
        label=routine.title or workout_type.display_name,
        workout_type=workout_type,
        exercises=copy.deepcopy(routine.exercises),
    )


def upcoming_workouts(
    start: date,
    schedule: ScheduleDefinition,
    days: int = 7,
    routines: Mapping[WorkoutType, WorkoutRoutine] | None = None,
    config: WorkoutConfig | None = None,
) -> list[DailyPlan]:
    """Resolve ``days`` consecutive dates beginning at ``start``."""
    plans = []
    for offset in range(max(days, 0)):
        day = start + timedelta(days=offset)
        plans.append(
            DailyPlan(
                date=day,
                day_name=WEEKDAY_ABBREVIATIONS[day.weekday()],
                assignment=resolve(day, schedule, routines, config),
            )
        )
    return plans


def week_schedule(
    reference: date,
    schedule: ScheduleDefinition,
    routines: Mapping[WorkoutType, WorkoutRoutine] | None = None,
    config: WorkoutConfig | None = None,
) -> list[DailyPlan]:
    """Monday-to-Sunday plan for the week containing ``reference``."""
    monday = reference - timedelta(days=reference.weekday())
    return upcoming_workouts(monday, schedule, 7, routines, config)
