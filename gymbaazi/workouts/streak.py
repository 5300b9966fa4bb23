"""Consecutive-workout streaks.

A streak counts qualifying days (days whose resolved assignment is not
REST) with a completed session log, walking backward from ``today``.  Rest
days are skipped without breaking or extending the run.  The first
qualifying day without a completed log ends the walk; that includes today,
so the streak reads 0 until today's session is logged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from gymbaazi.workouts.base import ScheduleDefinition, SessionLog
from gymbaazi.workouts.config_loader import WorkoutConfig, get_workout_config
from gymbaazi.workouts.schedule import is_rest_day

logger = logging.getLogger("gymbaazi.workouts.streak")

History = Mapping[date, SessionLog] | Iterable[SessionLog]


def index_history(history: History) -> dict[date, SessionLog]:
    if isinstance(history, Mapping):
        return dict(history)
    return {log.date: log for log in history}


def completed_dates(history: History) -> set[date]:
    return {d for d, log in index_history(history).items() if log.completed}


def current_streak(
    today: date,
    schedule: ScheduleDefinition,
    history: History,
    *,
    config: WorkoutConfig | None = None,
    max_lookback_days: int | None = None,
) -> int:
    """Count consecutive completed qualifying days ending at ``today``.

    Args:
        today:             First day examined (user's local date).
        schedule:          Schedule used to decide which days are REST.
        history:           Session logs, keyed by date or as a plain iterable.
        config:            Workout config (defaults to the global singleton).
        max_lookback_days: Cap on days walked, rest days included.  Defaults
                           to ``config.streak.max_lookback_days``.

    Returns:
        The streak length, 0 when the most recent qualifying day is missed.
    """
    cfg = config or get_workout_config()
    limit = max_lookback_days if max_lookback_days is not None else cfg.streak.max_lookback_days
    done = completed_dates(history)

    streak = 0
    day = today
    for _ in range(limit):
        if is_rest_day(day, schedule, cfg):
            day -= timedelta(days=1)
            continue
        if day not in done:
            break
        streak += 1
        day -= timedelta(days=1)
    else:
        logger.debug("Streak walk hit the %d-day lookback cap at %s", limit, day)
    return streak


def best_streak(
    schedule: ScheduleDefinition,
    history: History,
    *,
    until: date | None = None,
    config: WorkoutConfig | None = None,
) -> int:
    """Longest run of completed qualifying days anywhere in ``history``.

    Walks forward from the earliest completed log to ``until`` (default: the
    latest completed log).  Evaluated against the current schedule, so a run
    logged under an older schedule may be split differently than it was then.
    """
    cfg = config or get_workout_config()
    done = completed_dates(history)
    if not done:
        return 0

    day = min(done)
    end = until or max(done)
    best = run = 0
    while day <= end:
        if not is_rest_day(day, schedule, cfg):
            if day in done:
                run += 1
                best = max(best, run)
            else:
                run = 0
        day += timedelta(days=1)
    return best
