"""Live workout session schemas."""

from __future__ import annotations

import datetime as dt
import uuid

from pydantic import Field

from gymbaazi.models.base import GymBaaziBase
from gymbaazi.workouts.base import SessionStatus, WorkoutType


# ---------- Exercises ----------

class ExerciseSchema(GymBaaziBase):
    """Exercise as sent by clients and returned in routines and assignments.

    ``id`` may be omitted on input; a fresh one is generated.
    """

    id: str | None = None
    name: str
    sets: int = 3
    reps: str = "10"
    is_compound: bool = False
    rest_time: str = "90 sec"
    rest_seconds: int = 90
    exercise_db_id: str | None = None


class AssignmentRead(GymBaaziBase):
    identifier: str
    label: str
    workout_type: WorkoutType
    exercises: list[ExerciseSchema] = Field(default_factory=list)
    is_custom: bool
    is_rest: bool


# ---------- Sets ----------

class SetRecordRead(GymBaaziBase):
    id: str
    exercise_id: str
    exercise_name: str
    set_number: int
    target_reps: str
    actual_reps: int
    weight: float
    completed: bool
    volume: float


class UpdateSetRequest(GymBaaziBase):
    """New weight (kg) and reps for one set."""

    weight: float
    reps: int


# ---------- Session ----------

class StartSessionRequest(GymBaaziBase):
    """What to train.

    Precedence: ``day_id`` (a custom day), then ``workout_type`` (a rotation
    routine), then whatever the schedule resolves for ``date`` (default today).
    """

    day_id: uuid.UUID | None = None
    workout_type: WorkoutType | None = None
    date: dt.date | None = None


class SessionStateRead(GymBaaziBase):
    status: SessionStatus
    is_active: bool
    is_paused: bool
    assignment: AssignmentRead | None = None
    start_timestamp: dt.datetime | None = None
    elapsed_seconds: int = 0
    sets: list[SetRecordRead] = Field(default_factory=list)
    last_persisted_at: dt.datetime | None = None


# ---------- Logs ----------

class SessionLogRead(GymBaaziBase):
    id: uuid.UUID
    date: dt.date
    workout_type: WorkoutType
    day_name: str | None = None
    completed: bool
    duration_seconds: int
    sets: list[SetRecordRead] = Field(default_factory=list)
    total_volume: float
    completed_sets_count: int
    completion_ratio: float
