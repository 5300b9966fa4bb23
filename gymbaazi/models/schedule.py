"""Weekly schedule, custom day, routine and template schemas."""

from __future__ import annotations

import datetime as dt
import uuid

from pydantic import Field

from gymbaazi.models.base import GymBaaziBase
from gymbaazi.models.session import AssignmentRead, ExerciseSchema
from gymbaazi.workouts.base import WorkoutType


# ---------- Custom workout days ----------

class WorkoutDayBase(GymBaaziBase):
    name: str
    day_of_week: int | None = Field(None, ge=0, le=6, description="0 = Monday .. 6 = Sunday")


class WorkoutDayCreate(WorkoutDayBase):
    """New custom day.  With ``template_id`` and no exercises, the template's
    exercises are used."""

    exercises: list[ExerciseSchema] = Field(default_factory=list)
    template_id: str | None = None


class WorkoutDayUpdate(GymBaaziBase):
    name: str | None = None
    day_of_week: int | None = Field(None, ge=0, le=6)
    clear_day_of_week: bool = False
    exercises: list[ExerciseSchema] | None = None


class WorkoutDayRead(WorkoutDayBase):
    id: uuid.UUID
    exercises: list[ExerciseSchema] = Field(default_factory=list)
    scheduled_day_name: str | None = None
    created_at: dt.datetime


# ---------- Plans ----------

class DailyPlanRead(GymBaaziBase):
    date: dt.date
    day_name: str
    assignment: AssignmentRead


class TodayRead(DailyPlanRead):
    is_rest_day: bool
    completed_today: bool


# ---------- Routines ----------

class RoutineRead(GymBaaziBase):
    type: WorkoutType
    title: str
    subtitle: str
    exercises: list[ExerciseSchema] = Field(default_factory=list)
    warmup: list[str] = Field(default_factory=list)
    cooldown: list[str] = Field(default_factory=list)


class RoutineUpdate(GymBaaziBase):
    title: str | None = None
    subtitle: str | None = None
    exercises: list[ExerciseSchema] | None = None
    warmup: list[str] | None = None
    cooldown: list[str] | None = None


class MoveExerciseRequest(GymBaaziBase):
    source: int = Field(..., ge=0)
    destination: int = Field(..., ge=0)


# ---------- Templates ----------

class TemplateExerciseRead(GymBaaziBase):
    name: str
    sets: int
    reps: str
    muscle: str


class TemplateRead(GymBaaziBase):
    id: str
    name: str
    description: str
    exercises: list[TemplateExerciseRead] = Field(default_factory=list)


class SuggestionRead(GymBaaziBase):
    day_of_week: int
    day_name: str
    full_day_name: str
    template: TemplateRead
