"""Workout history, streak and lifetime statistics."""

from __future__ import annotations

import datetime as dt
import uuid
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from gymbaazi.dependencies import Repository, Today
from gymbaazi.models.history import StatsRead, StreakRead
from gymbaazi.models.session import SessionLogRead
from gymbaazi.workouts.formatting import format_duration_human
from gymbaazi.workouts.stats import compute_stats
from gymbaazi.workouts.streak import best_streak, current_streak

router = APIRouter(prefix="/history", tags=["history"])


@router.get("/logs", response_model=list[SessionLogRead])
def list_logs(
    repository: Repository,
    start: dt.date | None = Query(default=None),
    end: dt.date | None = Query(default=None),
    limit: int | None = Query(default=None, ge=1),
) -> Any:
    if start is not None or end is not None:
        logs = repository.get_workout_logs(start or dt.date.min, end or dt.date.max)
    else:
        logs = repository.list_workout_logs()
    if limit is not None:
        logs = logs[:limit]
    return [SessionLogRead.model_validate(log) for log in logs]


@router.get("/logs/{log_date}", response_model=SessionLogRead)
def get_log(log_date: dt.date, repository: Repository) -> Any:
    log = repository.get_workout_log(log_date)
    if log is None:
        raise HTTPException(status_code=404, detail="No workout logged on that date")
    return SessionLogRead.model_validate(log)


@router.delete("/logs/{log_id}", status_code=204)
def delete_log(log_id: uuid.UUID, repository: Repository) -> None:
    if not repository.delete_workout_log(log_id):
        raise HTTPException(status_code=404, detail="Workout log not found")


@router.get("/streak", response_model=StreakRead)
def get_streak(repository: Repository, today: Today) -> Any:
    schedule = repository.get_schedule()
    history = repository.load_history()
    current = current_streak(today, schedule, history)
    return StreakRead(
        as_of=today,
        current_streak=current,
        best_streak=max(best_streak(schedule, history), current),
    )


@router.get("/stats", response_model=StatsRead)
def get_stats(repository: Repository, today: Today) -> Any:
    stats = compute_stats(today, repository.get_schedule(), repository.load_history())
    return StatsRead(
        **stats.to_dict(),
        total_duration_display=format_duration_human(stats.total_duration_seconds),
    )
