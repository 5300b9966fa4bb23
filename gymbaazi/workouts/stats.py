"""Aggregate training statistics for the profile screen."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date, timedelta

from gymbaazi.workouts.base import ScheduleDefinition
from gymbaazi.workouts.config_loader import WorkoutConfig
from gymbaazi.workouts.streak import History, index_history, best_streak, current_streak


@dataclass
class WorkoutStats:
    """Lifetime totals derived from history and the schedule.

    Attributes:
        total_workouts:         Completed sessions.
        current_streak:         See ``streak.current_streak``.
        best_streak:            Longest streak in history.
        total_duration_seconds: Time spent across completed sessions.
        lifetime_volume:        Weight × reps over every completed set.
        workout_days_created:   Custom days in the schedule.
        workouts_this_week:     Completed sessions Monday..Sunday of ``today``.
    """

    total_workouts: int = 0
    current_streak: int = 0
    best_streak: int = 0
    total_duration_seconds: int = 0
    lifetime_volume: float = 0.0
    workout_days_created: int = 0
    workouts_this_week: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_stats(
    today: date,
    schedule: ScheduleDefinition,
    history: History,
    config: WorkoutConfig | None = None,
) -> WorkoutStats:
    logs = index_history(history)
    completed = [log for log in logs.values() if log.completed]
    week_start = today - timedelta(days=today.weekday())
    week_end = week_start + timedelta(days=6)

    current = current_streak(today, schedule, logs, config=config)
    return WorkoutStats(
        total_workouts=len(completed),
        current_streak=current,
        best_streak=max(best_streak(schedule, logs, config=config), current),
        total_duration_seconds=sum(log.duration_seconds for log in completed),
        lifetime_volume=sum(log.total_volume for log in completed),
        workout_days_created=len(schedule.days),
        workouts_this_week=sum(1 for log in completed if week_start <= log.date <= week_end),
    )
