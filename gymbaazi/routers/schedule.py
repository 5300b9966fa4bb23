"""Weekly schedule, custom workout days, templates and suggestions."""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from gymbaazi.dependencies import Repository, Today
from gymbaazi.models.schedule import (
    DailyPlanRead,
    SuggestionRead,
    TemplateRead,
    TodayRead,
    WorkoutDayCreate,
    WorkoutDayRead,
    WorkoutDayUpdate,
)
from gymbaazi.models.session import AssignmentRead, ExerciseSchema
from gymbaazi.workouts.base import WEEKDAY_ABBREVIATIONS, CustomWorkoutDay, Exercise
from gymbaazi.workouts.routines import TEMPLATES, get_template, suggested_schedule
from gymbaazi.workouts.schedule import is_rest_day, resolve, upcoming_workouts, week_schedule
from gymbaazi.workouts.validation import (
    ValidationResult,
    validate_sets,
    validate_workout_day_name,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])
logger = logging.getLogger("gymbaazi.routers.schedule")


def _to_exercises(items: list[ExerciseSchema]) -> list[Exercise]:
    result = ValidationResult()
    for i, item in enumerate(items):
        result.add(validate_sets(item.sets), f"exercises[{i}].sets")
    result.raise_if_invalid()
    return [Exercise.from_dict(item.model_dump()) for item in items]


# ---------- Plans ----------

@router.get("/today", response_model=TodayRead)
def get_today(repository: Repository, today: Today) -> Any:
    schedule = repository.get_schedule()
    log = repository.get_workout_log(today)
    return TodayRead(
        date=today,
        day_name=WEEKDAY_ABBREVIATIONS[today.weekday()],
        assignment=AssignmentRead.model_validate(
            resolve(today, schedule, repository.get_routines())
        ),
        is_rest_day=is_rest_day(today, schedule),
        completed_today=bool(log and log.completed),
    )


@router.get("/week", response_model=list[DailyPlanRead])
def get_week(repository: Repository, today: Today) -> Any:
    plans = week_schedule(today, repository.get_schedule(), repository.get_routines())
    return [DailyPlanRead.model_validate(p) for p in plans]


@router.get("/upcoming", response_model=list[DailyPlanRead])
def get_upcoming(
    repository: Repository,
    today: Today,
    days: int = Query(default=7, ge=1, le=28),
) -> Any:
    plans = upcoming_workouts(today, repository.get_schedule(), days, repository.get_routines())
    return [DailyPlanRead.model_validate(p) for p in plans]


# ---------- Custom workout days ----------

@router.get("/days", response_model=list[WorkoutDayRead])
def list_days(repository: Repository) -> Any:
    return [WorkoutDayRead.model_validate(d) for d in repository.get_schedule().days]


@router.post("/days", response_model=WorkoutDayRead, status_code=201)
def create_day(body: WorkoutDayCreate, repository: Repository) -> Any:
    error = validate_workout_day_name(body.name)
    if error is not None:
        raise error

    if body.template_id and not body.exercises:
        try:
            template = get_template(body.template_id)
        except KeyError:
            raise HTTPException(status_code=404, detail="Template not found") from None
        day = template.to_custom_day(body.day_of_week)
        day.name = body.name
    else:
        day = CustomWorkoutDay(
            name=body.name,
            day_of_week=body.day_of_week,
            exercises=_to_exercises(body.exercises),
        )

    repository.add_workout_day(day)
    logger.info("Created workout day %s (%s)", day.name, day.scheduled_day_name or "unscheduled")
    return WorkoutDayRead.model_validate(day)


@router.put("/days/{day_id}", response_model=WorkoutDayRead)
def update_day(day_id: uuid.UUID, body: WorkoutDayUpdate, repository: Repository) -> Any:
    day = repository.get_schedule().day_by_id(day_id)
    if day is None:
        raise HTTPException(status_code=404, detail="Workout day not found")

    if body.name is not None:
        error = validate_workout_day_name(body.name)
        if error is not None:
            raise error
        day.name = body.name
    if body.clear_day_of_week:
        day.day_of_week = None
    elif body.day_of_week is not None:
        day.day_of_week = body.day_of_week
    if body.exercises is not None:
        day.exercises = _to_exercises(body.exercises)

    repository.update_workout_day(day)
    return WorkoutDayRead.model_validate(day)


@router.delete("/days/{day_id}", status_code=204)
def delete_day(day_id: uuid.UUID, repository: Repository) -> None:
    if not repository.delete_workout_day(day_id):
        raise HTTPException(status_code=404, detail="Workout day not found")


# ---------- Templates ----------

@router.get("/templates", response_model=list[TemplateRead])
def list_templates() -> Any:
    return [TemplateRead.model_validate(t) for t in TEMPLATES]


@router.get("/suggestions/{days_per_week}", response_model=list[SuggestionRead])
def get_suggestions(days_per_week: int) -> Any:
    if not 1 <= days_per_week <= 7:
        raise HTTPException(status_code=400, detail="days_per_week must be between 1 and 7")
    return [SuggestionRead.model_validate(s) for s in suggested_schedule(days_per_week)]
