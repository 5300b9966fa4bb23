"""Canonical data models for the GymBaazi workout core.

These dataclasses are the single source of truth shared by the schedule
resolver, session controller, streak walk, repository and HTTP layer.
Every record converts to and from plain JSON-compatible dicts; dates and
timestamps travel as ISO-8601 strings.  ``from_dict`` ignores unknown keys
and defaults missing optional ones, so stored records only ever evolve by
adding optional fields.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any

logger = logging.getLogger("gymbaazi.workouts")

#: Weekday keys in Python ``date.weekday()`` order (0 = Monday).
WEEKDAY_KEYS: tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
WEEKDAY_ABBREVIATIONS: tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
WEEKDAY_NAMES: tuple[str, ...] = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

KG_PER_LB = 0.45359237


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class WorkoutType(str, Enum):
    """Workout category: the PPL rotation, rest, or a user-defined day."""

    PUSH = "PUSH"
    PULL = "PULL"
    LEGS = "LEGS"
    REST = "REST"
    CUSTOM = "CUSTOM"

    @property
    def display_name(self) -> str:
        return _WORKOUT_TYPE_LABELS[self][0]

    @property
    def description(self) -> str:
        return _WORKOUT_TYPE_LABELS[self][1]


_WORKOUT_TYPE_LABELS: dict[WorkoutType, tuple[str, str]] = {
    WorkoutType.PUSH: ("Push Day", "Chest, Shoulders & Triceps"),
    WorkoutType.PULL: ("Pull Day", "Back & Biceps"),
    WorkoutType.LEGS: ("Leg Day", "Quads, Hamstrings & Glutes"),
    WorkoutType.REST: ("Rest Day", "Recovery & Stretching"),
    WorkoutType.CUSTOM: ("Custom Day", "User-defined workout"),
}

#: Categories allowed in the fixed weekly rotation.
ROTATION_TYPES: frozenset[WorkoutType] = frozenset(
    {WorkoutType.PUSH, WorkoutType.PULL, WorkoutType.LEGS, WorkoutType.REST}
)


class WeightUnit(str, Enum):
    """Preferred display unit for weights.  Storage is always kilograms."""

    KG = "kg"
    LBS = "lbs"

    @property
    def display_name(self) -> str:
        return "Kilograms" if self is WeightUnit.KG else "Pounds"

    @property
    def symbol(self) -> str:
        return self.value

    def to_kg(self, value: float) -> float:
        return value if self is WeightUnit.KG else value * KG_PER_LB

    def from_kg(self, value_kg: float) -> float:
        return value_kg if self is WeightUnit.KG else value_kg / KG_PER_LB


class SessionStatus(str, Enum):
    """Lifecycle state of the workout session controller."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


# ---------------------------------------------------------------------------
# Parsing helpers
# ---------------------------------------------------------------------------


def _parse_datetime(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or pass through a datetime)."""
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Could not parse datetime string: %r", value)
        return None


def _parse_date(value: Any) -> date | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        logger.warning("Could not parse date string: %r", value)
        return None


def _iso(value: date | datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def new_exercise_id() -> str:
    """Generate a short exercise identifier, e.g. ``ex_1a2b3c4d``."""
    return f"ex_{uuid.uuid4().hex[:8]}"


# ---------------------------------------------------------------------------
# Routine building blocks
# ---------------------------------------------------------------------------


@dataclass
class Exercise:
    """One exercise in a routine or custom day.

    Attributes:
        id:             Stable identifier used to key logged sets.
        name:           Display name.
        sets:           Target number of sets.
        reps:           Target rep range text, e.g. "8-10" or "12".
        is_compound:    Multi-joint lift (longer rest).
        rest_time:      Human-readable rest guidance, e.g. "2-3 min".
        rest_seconds:   Rest timer default in seconds.
        exercise_db_id: Catalog id for looking up media and instructions.
    """

    id: str
    name: str
    sets: int
    reps: str
    is_compound: bool = False
    rest_time: str = "90 sec"
    rest_seconds: int = 90
    exercise_db_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "sets": self.sets,
            "reps": self.reps,
            "is_compound": self.is_compound,
            "rest_time": self.rest_time,
            "rest_seconds": self.rest_seconds,
            "exercise_db_id": self.exercise_db_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Exercise:
        return cls(
            id=str(data.get("id") or new_exercise_id()),
            name=data["name"],
            sets=int(data.get("sets", 3)),
            reps=str(data.get("reps", "10")),
            is_compound=bool(data.get("is_compound", False)),
            rest_time=data.get("rest_time", "90 sec"),
            rest_seconds=int(data.get("rest_seconds", 90)),
            exercise_db_id=data.get("exercise_db_id"),
        )


@dataclass
class WorkoutRoutine:
    """A rotation category's exercise plan (the PPL defaults or a user override)."""

    type: WorkoutType
    title: str
    subtitle: str
    exercises: list[Exercise] = field(default_factory=list)
    warmup: list[str] = field(default_factory=list)
    cooldown: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "title": self.title,
            "subtitle": self.subtitle,
            "exercises": [e.to_dict() for e in self.exercises],
            "warmup": list(self.warmup),
            "cooldown": list(self.cooldown),
        }

    @classmethod
    def from_dict(cls, data: dict) -> WorkoutRoutine:
        return cls(
            type=WorkoutType(data["type"]),
            title=data.get("title", ""),
            subtitle=data.get("subtitle", ""),
            exercises=[Exercise.from_dict(e) for e in data.get("exercises", [])],
            warmup=list(data.get("warmup", [])),
            cooldown=list(data.get("cooldown", [])),
        )


@dataclass
class CustomWorkoutDay:
    """A user-defined workout day, optionally bound to a weekday.

    Attributes:
        name:        Display name, e.g. "Chest & Arms".
        day_of_week: 0 = Monday .. 6 = Sunday; None = not scheduled.
        exercises:   Ordered exercise list.
        id:          Stable identifier.
        created_at:  Creation time.
    """

    name: str
    day_of_week: int | None = None
    exercises: list[Exercise] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def scheduled_day_name(self) -> str | None:
        if self.day_of_week is None or not 0 <= self.day_of_week <= 6:
            return None
        return WEEKDAY_ABBREVIATIONS[self.day_of_week]

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "day_of_week": self.day_of_week,
            "exercises": [e.to_dict() for e in self.exercises],
            "created_at": _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> CustomWorkoutDay:
        day_of_week = data.get("day_of_week")
        return cls(
            id=uuid.UUID(str(data["id"])) if data.get("id") else uuid.uuid4(),
            name=data["name"],
            day_of_week=int(day_of_week) if day_of_week is not None else None,
            exercises=[Exercise.from_dict(e) for e in data.get("exercises", [])],
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
        )


@dataclass
class ScheduleDefinition:
    """The user's weekly plan: custom days plus an optional rotation override.

    ``rotation`` maps weekday → category; None means the configured PPL
    rotation applies.  Several days may share a weekday binding; lookups
    take the first match in list order.
    """

    days: list[CustomWorkoutDay] = field(default_factory=list)
    rotation: dict[int, WorkoutType] | None = None

    def workout_for(self, weekday: int) -> CustomWorkoutDay | None:
        """Return the first custom day bound to ``weekday`` (0 = Monday)."""
        return next((d for d in self.days if d.day_of_week == weekday), None)

    def has_workout(self, weekday: int) -> bool:
        return any(d.day_of_week == weekday for d in self.days)

    def day_by_id(self, day_id: uuid.UUID) -> CustomWorkoutDay | None:
        return next((d for d in self.days if d.id == day_id), None)

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"days": [d.to_dict() for d in self.days]}
        if self.rotation is not None:
            data["rotation"] = {WEEKDAY_KEYS[k]: v.value for k, v in sorted(self.rotation.items())}
        return data

    @classmethod
    def from_dict(cls, data: dict) -> ScheduleDefinition:
        rotation_raw = data.get("rotation")
        rotation = None
        if rotation_raw:
            rotation = {
                WEEKDAY_KEYS.index(k): WorkoutType(v)
                for k, v in rotation_raw.items()
                if k in WEEKDAY_KEYS
            }
        return cls(
            days=[CustomWorkoutDay.from_dict(d) for d in data.get("days", [])],
            rotation=rotation,
        )


@dataclass
class WorkoutDayAssignment:
    """What to train on a given date, as produced by the schedule resolver.

    Attributes:
        identifier:   Rotation category value ("PUSH") or custom day UUID string.
        label:        Display label ("Push Day", "Chest & Arms").
        workout_type: Category; CUSTOM for user-defined days.
        exercises:    Exercise list a session is seeded from.
    """

    identifier: str
    label: str
    workout_type: WorkoutType
    exercises: list[Exercise] = field(default_factory=list)

    @property
    def is_custom(self) -> bool:
        return self.workout_type is WorkoutType.CUSTOM

    @property
    def is_rest(self) -> bool:
        return self.workout_type is WorkoutType.REST

    def to_dict(self) -> dict:
        return {
            "identifier": self.identifier,
            "label": self.label,
            "workout_type": self.workout_type.value,
            "exercises": [e.to_dict() for e in self.exercises],
        }

    @classmethod
    def from_dict(cls, data: dict) -> WorkoutDayAssignment:
        return cls(
            identifier=str(data["identifier"]),
            label=data.get("label", ""),
            workout_type=WorkoutType(data.get("workout_type", WorkoutType.CUSTOM.value)),
            exercises=[Exercise.from_dict(e) for e in data.get("exercises", [])],
        )


# ---------------------------------------------------------------------------
# Session records
# ---------------------------------------------------------------------------


@dataclass
class SetRecord:
    """One logged set within a session.

    Attributes:
        exercise_id:   Exercise this set belongs to.
        exercise_name: Denormalized name for history display.
        set_number:    1-based position within the exercise.
        target_reps:   Target rep range text copied from the exercise.
        actual_reps:   Logged reps (seeded from the target range).
        weight:        Logged weight in kilograms.
        completed:     Whether the set was ticked off.
        id:            Stable identifier.
    """

    exercise_id: str
    exercise_name: str
    set_number: int
    target_reps: str = ""
    actual_reps: int = 0
    weight: float = 0.0
    completed: bool = False
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def volume(self) -> float:
        return self.weight * self.actual_reps

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "exercise_id": self.exercise_id,
            "exercise_name": self.exercise_name,
            "set_number": self.set_number,
            "target_reps": self.target_reps,
            "actual_reps": self.actual_reps,
            "weight": self.weight,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SetRecord:
        return cls(
            id=str(data.get("id") or uuid.uuid4()),
            exercise_id=data["exercise_id"],
            exercise_name=data.get("exercise_name", ""),
            set_number=int(data.get("set_number", 1)),
            target_reps=str(data.get("target_reps", "")),
            actual_reps=int(data.get("actual_reps", 0)),
            weight=float(data.get("weight", 0.0)),
            completed=bool(data.get("completed", False)),
        )


@dataclass
class SessionLog:
    """A finished workout, stored in history keyed by its calendar date.

    Attributes:
        date:             Calendar day of the workout (user's local date).
        workout_type:     Category trained.
        day_name:         Display label (rotation title or custom day name).
        completed:        Whether the session was completed.
        duration_seconds: Time spent in the running state.
        sets:             Logged sets, in session order.
        id:               Stable identifier.
    """

    date: date
    workout_type: WorkoutType
    day_name: str | None = None
    completed: bool = False
    duration_seconds: int = 0
    sets: list[SetRecord] = field(default_factory=list)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def total_volume(self) -> float:
        """Weight × reps summed over completed sets."""
        return sum(s.volume for s in self.sets if s.completed)

    @property
    def completed_sets_count(self) -> int:
        return sum(1 for s in self.sets if s.completed)

    @property
    def completion_ratio(self) -> float:
        if not self.sets:
            return 0.0
        return self.completed_sets_count / len(self.sets)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "date": self.date.isoformat(),
            "workout_type": self.workout_type.value,
            "day_name": self.day_name,
            "completed": self.completed,
            "duration_seconds": self.duration_seconds,
            "sets": [s.to_dict() for s in self.sets],
        }

    @classmethod
    def from_dict(cls, data: dict) -> SessionLog:
        return cls(
            id=uuid.UUID(str(data["id"])) if data.get("id") else uuid.uuid4(),
            date=_parse_date(data["date"]),
            workout_type=WorkoutType(data.get("workout_type", WorkoutType.CUSTOM.value)),
            day_name=data.get("day_name"),
            completed=bool(data.get("completed", False)),
            duration_seconds=int(data.get("duration_seconds", 0)),
            sets=[SetRecord.from_dict(s) for s in data.get("sets", [])],
        )


@dataclass
class RecoverySnapshot:
    """Persisted image of an active session, used to resume after a crash.

    Only valid while ``now - saved_at`` is inside the recovery window.
    """

    assignment: WorkoutDayAssignment
    start_timestamp: datetime
    elapsed_seconds_at_save: int
    sets: list[SetRecord]
    saved_at: datetime

    def age_seconds(self, now: datetime) -> float:
        return (now - self.saved_at).total_seconds()

    def is_fresh(self, now: datetime, window_seconds: int) -> bool:
        return self.age_seconds(now) < window_seconds

    def to_dict(self) -> dict:
        return {
            "assignment": self.assignment.to_dict(),
            "start_timestamp": _iso(self.start_timestamp),
            "elapsed_seconds_at_save": self.elapsed_seconds_at_save,
            "sets": [s.to_dict() for s in self.sets],
            "saved_at": _iso(self.saved_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> RecoverySnapshot:
        start_timestamp = _parse_datetime(data["start_timestamp"])
        saved_at = _parse_datetime(data["saved_at"])
        if start_timestamp is None or saved_at is None:
            raise ValueError("snapshot timestamps are missing or unparseable")
        return cls(
            assignment=WorkoutDayAssignment.from_dict(data["assignment"]),
            start_timestamp=start_timestamp,
            elapsed_seconds_at_save=int(data.get("elapsed_seconds_at_save", 0)),
            sets=[SetRecord.from_dict(s) for s in data.get("sets", [])],
            saved_at=saved_at,
        )


@dataclass
class SessionState:
    """Read-only view of the session controller handed to observers."""

    status: SessionStatus = SessionStatus.IDLE
    assignment: WorkoutDayAssignment | None = None
    start_timestamp: datetime | None = None
    elapsed_seconds: int = 0
    sets: list[SetRecord] = field(default_factory=list)
    last_persisted_at: datetime | None = None

    @property
    def is_active(self) -> bool:
        return self.status is not SessionStatus.IDLE

    @property
    def is_paused(self) -> bool:
        return self.status is SessionStatus.PAUSED

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "is_active": self.is_active,
            "is_paused": self.is_paused,
            "assignment": self.assignment.to_dict() if self.assignment else None,
            "start_timestamp": _iso(self.start_timestamp),
            "elapsed_seconds": self.elapsed_seconds,
            "sets": [s.to_dict() for s in self.sets],
            "last_persisted_at": _iso(self.last_persisted_at),
        }


# ---------------------------------------------------------------------------
# User records
# ---------------------------------------------------------------------------


@dataclass
class UserProfile:
    """Profile collected during onboarding."""

    name: str
    age: int
    height_cm: float
    weight_kg: float
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "age": self.age,
            "height_cm": self.height_cm,
            "weight_kg": self.weight_kg,
            "created_at": _iso(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserProfile:
        return cls(
            id=uuid.UUID(str(data["id"])) if data.get("id") else uuid.uuid4(),
            name=data["name"],
            age=int(data["age"]),
            height_cm=float(data["height_cm"]),
            weight_kg=float(data["weight_kg"]),
            created_at=_parse_datetime(data.get("created_at")) or datetime.now(),
        )


@dataclass
class UserSettings:
    """App preferences.  ``dark_mode_override`` None means follow the system."""

    notifications_enabled: bool = True
    rest_timer_sound: bool = True
    haptic_feedback: bool = True
    dark_mode_override: bool | None = None
    weight_unit: WeightUnit = WeightUnit.KG

    def to_dict(self) -> dict:
        return {
            "notifications_enabled": self.notifications_enabled,
            "rest_timer_sound": self.rest_timer_sound,
            "haptic_feedback": self.haptic_feedback,
            "dark_mode_override": self.dark_mode_override,
            "weight_unit": self.weight_unit.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> UserSettings:
        return cls(
            notifications_enabled=bool(data.get("notifications_enabled", True)),
            rest_timer_sound=bool(data.get("rest_timer_sound", True)),
            haptic_feedback=bool(data.get("haptic_feedback", True)),
            dark_mode_override=data.get("dark_mode_override"),
            weight_unit=WeightUnit(data.get("weight_unit", WeightUnit.KG.value)),
        )
