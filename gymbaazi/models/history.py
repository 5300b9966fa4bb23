"""History, streak and statistics schemas."""

from __future__ import annotations

from datetime import date

from gymbaazi.models.base import GymBaaziBase


class StreakRead(GymBaaziBase):
    as_of: date
    current_streak: int
    best_streak: int


class StatsRead(GymBaaziBase):
    total_workouts: int
    current_streak: int
    best_streak: int
    total_duration_seconds: int
    total_duration_display: str
    lifetime_volume: float
    workout_days_created: int
    workouts_this_week: int
