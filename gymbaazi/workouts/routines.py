"""Built-in routines and quick-start templates.

``DEFAULT_ROUTINES`` holds the stock Push / Pull / Legs plans the rotation
falls back to when the user has not customised a category.  ``TEMPLATES``
are pre-built days the user can drop onto a weekday, and
``suggested_schedule`` picks templates for a given training frequency.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from gymbaazi.workouts.base import (
    WEEKDAY_ABBREVIATIONS,
    WEEKDAY_NAMES,
    CustomWorkoutDay,
    Exercise,
    WorkoutRoutine,
    WorkoutType,
    new_exercise_id,
)

logger = logging.getLogger("gymbaazi.workouts.routines")

DEFAULT_TARGET_REPS = 10


def parse_target_reps(reps: str, default: int = DEFAULT_TARGET_REPS) -> int:
    """Seed value for a set's logged reps from a target range string.

    ``"8-10"`` → 9 (integer midpoint), ``"12"`` → 12, anything without a
    leading integer (``"12 each"``, ``"AMRAP"``) → ``default``.

    Examples::

        >>> parse_target_reps("6-8")
        7
        >>> parse_target_reps("12 each")
        10
    """
    parts = [int(p) for p in reps.split("-") if p.isdigit()]
    if len(parts) == 2:
        return (parts[0] + parts[1]) // 2
    if parts:
        return parts[0]
    return default


# ---------------------------------------------------------------------------
# Default PPL routines
# ---------------------------------------------------------------------------


def _ex(id: str, name: str, sets: int, reps: str, compound: bool, rest: str, rest_s: int) -> Exercise:
    return Exercise(
        id=id,
        name=name,
        sets=sets,
        reps=reps,
        is_compound=compound,
        rest_time=rest,
        rest_seconds=rest_s,
    )


DEFAULT_ROUTINES: dict[WorkoutType, WorkoutRoutine] = {
    WorkoutType.PUSH: WorkoutRoutine(
        type=WorkoutType.PUSH,
        title="Push Day",
        subtitle="Chest, Shoulders & Triceps",
        exercises=[
            _ex("push_1", "Bench Press", 4, "6-8", True, "3 min", 180),
            _ex("push_2", "Overhead Press", 4, "6-8", True, "3 min", 180),
            _ex("push_3", "Incline Dumbbell Press", 3, "8-10", True, "2 min", 120),
            _ex("push_4", "Lateral Raises", 3, "12-15", False, "90 sec", 90),
            _ex("push_5", "Tricep Pushdown", 3, "10-12", False, "90 sec", 90),
            _ex("push_6", "Overhead Tricep Extension", 3, "10-12", False, "90 sec", 90),
        ],
        warmup=["5 min cardio", "Arm circles", "Light shoulder rotations"],
        cooldown=["Chest stretch", "Tricep stretch", "Shoulder stretch"],
    ),
    WorkoutType.PULL: WorkoutRoutine(
        type=WorkoutType.PULL,
        title="Pull Day",
        subtitle="Back & Biceps",
        exercises=[
            _ex("pull_1", "Deadlift", 4, "5-6", True, "4 min", 240),
            _ex("pull_2", "Barbell Row", 4, "6-8", True, "3 min", 180),
            _ex("pull_3", "Lat Pulldown", 3, "8-10", True, "2 min", 120),
            _ex("pull_4", "Seated Cable Row", 3, "10-12", True, "2 min", 120),
            _ex("pull_5", "Face Pulls", 3, "15-20", False, "90 sec", 90),
            _ex("pull_6", "Barbell Curl", 3, "10-12", False, "90 sec", 90),
            _ex("pull_7", "Hammer Curls", 3, "10-12", False, "90 sec", 90),
        ],
        warmup=["5 min cardio", "Cat-cow stretches", "Arm swings"],
        cooldown=["Lat stretch", "Back stretch", "Bicep stretch"],
    ),
    WorkoutType.LEGS: WorkoutRoutine(
        type=WorkoutType.LEGS,
        title="Leg Day",
        subtitle="Quads, Hamstrings & Glutes",
        exercises=[
            _ex("legs_1", "Squat", 4, "6-8", True, "4 min", 240),
            _ex("legs_2", "Romanian Deadlift", 4, "8-10", True, "3 min", 180),
            _ex("legs_3", "Leg Press", 3, "10-12", True, "2 min", 120),
            _ex("legs_4", "Walking Lunges", 3, "12 each", True, "2 min", 120),
            _ex("legs_5", "Leg Curl", 3, "10-12", False, "90 sec", 90),
            _ex("legs_6", "Leg Extension", 3, "12-15", False, "90 sec", 90),
            _ex("legs_7", "Standing Calf Raises", 4, "15-20", False, "60 sec", 60),
        ],
        warmup=["5 min cardio", "Bodyweight squats", "Leg swings"],
        cooldown=["Quad stretch", "Hamstring stretch", "Calf stretch"],
    ),
    WorkoutType.REST: WorkoutRoutine(
        type=WorkoutType.REST,
        title="Rest Day",
        subtitle="Recovery & Stretching",
        exercises=[],
        warmup=[],
        cooldown=["Light stretching", "Foam rolling", "Meditation"],
    ),
}


def default_routine(workout_type: WorkoutType) -> WorkoutRoutine:
    """Return a deep copy of the stock routine for ``workout_type``.

    Raises:
        KeyError: For CUSTOM, which has no stock routine.
    """
    return copy.deepcopy(DEFAULT_ROUTINES[workout_type])


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateExercise:
    name: str
    sets: int
    reps: str
    muscle: str

    def to_exercise(self) -> Exercise:
        """Expand into an Exercise; four or more sets counts as a compound lift."""
        compound = self.sets >= 4
        return Exercise(
            id=new_exercise_id(),
            name=self.name,
            sets=self.sets,
            reps=self.reps,
            is_compound=compound,
            rest_time="2-3 min" if compound else "60-90 sec",
            rest_seconds=150 if compound else 90,
        )


@dataclass(frozen=True)
class WorkoutTemplate:
    """A pre-built day the user can add to their schedule."""

    id: str
    name: str
    description: str
    exercises: tuple[TemplateExercise, ...] = field(default_factory=tuple)

    def to_custom_day(self, day_of_week: int | None = None) -> CustomWorkoutDay:
        return CustomWorkoutDay(
            name=self.name,
            day_of_week=day_of_week,
            exercises=[e.to_exercise() for e in self.exercises],
        )


def _t(name: str, sets: int, reps: str, muscle: str) -> TemplateExercise:
    return TemplateExercise(name=name, sets=sets, reps=reps, muscle=muscle)


PUSH_DAY = WorkoutTemplate(
    id="push",
    name="Push Day",
    description="Chest, Shoulders, Triceps",
    exercises=(
        _t("Bench Press", 4, "8-10", "Chest"),
        _t("Overhead Press", 3, "8-10", "Shoulders"),
        _t("Incline Dumbbell Press", 3, "10-12", "Upper Chest"),
        _t("Lateral Raises", 3, "12-15", "Side Delts"),
        _t("Tricep Pushdown", 3, "12-15", "Triceps"),
        _t("Overhead Tricep Extension", 3, "12-15", "Triceps"),
    ),
)

PULL_DAY = WorkoutTemplate(
    id="pull",
    name="Pull Day",
    description="Back, Biceps, Rear Delts",
    exercises=(
        _t("Deadlift", 3, "5-6", "Back"),
        _t("Barbell Row", 4, "8-10", "Back"),
        _t("Lat Pulldown", 3, "10-12", "Lats"),
        _t("Face Pulls", 3, "15-20", "Rear Delts"),
        _t("Barbell Curl", 3, "10-12", "Biceps"),
        _t("Hammer Curls", 3, "12-15", "Biceps"),
    ),
)

LEG_DAY = WorkoutTemplate(
    id="legs",
    name="Leg Day",
    description="Quads, Hamstrings, Glutes, Calves",
    exercises=(
        _t("Squat", 4, "6-8", "Quadriceps"),
        _t("Romanian Deadlift", 3, "8-10", "Hamstrings"),
        _t("Leg Press", 3, "10-12", "Quadriceps"),
        _t("Walking Lunges", 3, "12 each", "Glutes"),
        _t("Leg Curl", 3, "12-15", "Hamstrings"),
        _t("Calf Raises", 4, "15-20", "Calves"),
    ),
)

UPPER_BODY = WorkoutTemplate(
    id="upper",
    name="Upper Body",
    description="Full upper body workout",
    exercises=(
        _t("Bench Press", 4, "8-10", "Chest"),
        _t("Barbell Row", 4, "8-10", "Back"),
        _t("Overhead Press", 3, "8-10", "Shoulders"),
        _t("Lat Pulldown", 3, "10-12", "Lats"),
        _t("Barbell Curl", 3, "10-12", "Biceps"),
        _t("Tricep Pushdown", 3, "12-15", "Triceps"),
    ),
)

LOWER_BODY = WorkoutTemplate(
    id="lower",
    name="Lower Body",
    description="Full lower body workout",
    exercises=(
        _t("Squat", 4, "6-8", "Quadriceps"),
        _t("Romanian Deadlift", 4, "8-10", "Hamstrings"),
        _t("Leg Press", 3, "10-12", "Quadriceps"),
        _t("Leg Curl", 3, "12-15", "Hamstrings"),
        _t("Hip Thrust", 3, "10-12", "Glutes"),
        _t("Calf Raises", 4, "15-20", "Calves"),
    ),
)

FULL_BODY = WorkoutTemplate(
    id="full",
    name="Full Body",
    description="Complete full body workout",
    exercises=(
        _t("Squat", 3, "8-10", "Quadriceps"),
        _t("Bench Press", 3, "8-10", "Chest"),
        _t("Barbell Row", 3, "8-10", "Back"),
        _t("Overhead Press", 3, "8-10", "Shoulders"),
        _t("Romanian Deadlift", 3, "10-12", "Hamstrings"),
        _t("Barbell Curl", 2, "10-12", "Biceps"),
        _t("Tricep Pushdown", 2, "12-15", "Triceps"),
    ),
)

TEMPLATES: tuple[WorkoutTemplate, ...] = (
    PUSH_DAY,
    PULL_DAY,
    LEG_DAY,
    UPPER_BODY,
    LOWER_BODY,
    FULL_BODY,
)

# Registry: template id → template
TEMPLATE_REGISTRY: dict[str, WorkoutTemplate] = {t.id: t for t in TEMPLATES}


def get_template(template_id: str) -> WorkoutTemplate:
    """Return the template registered under ``template_id``.

    Raises:
        KeyError: If no template has that id.
    """
    if template_id not in TEMPLATE_REGISTRY:
        raise KeyError(
            f"No template registered as '{template_id}'. "
            f"Available: {list(TEMPLATE_REGISTRY)}"
        )
    return TEMPLATE_REGISTRY[template_id]


# ---------------------------------------------------------------------------
# Frequency-based suggestions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DaySuggestion:
    """A template proposed for a weekday (0 = Monday)."""

    day_of_week: int
    template: WorkoutTemplate

    @property
    def day_name(self) -> str:
        return WEEKDAY_ABBREVIATIONS[self.day_of_week]

    @property
    def full_day_name(self) -> str:
        return WEEKDAY_NAMES[self.day_of_week]

    def to_custom_day(self) -> CustomWorkoutDay:
        return self.template.to_custom_day(self.day_of_week)


_SUGGESTIONS: dict[int, tuple[tuple[int, WorkoutTemplate], ...]] = {
    1: ((2, FULL_BODY),),
    2: ((0, UPPER_BODY), (3, LOWER_BODY)),
    3: ((0, PUSH_DAY), (2, PULL_DAY), (4, LEG_DAY)),
    4: ((0, UPPER_BODY), (1, LOWER_BODY), (3, UPPER_BODY), (4, LOWER_BODY)),
    5: ((0, PUSH_DAY), (1, PULL_DAY), (2, LEG_DAY), (4, UPPER_BODY), (5, LOWER_BODY)),
    6: ((0, PUSH_DAY), (1, PULL_DAY), (2, LEG_DAY), (3, PUSH_DAY), (4, PULL_DAY), (5, LEG_DAY)),
}
_SUGGESTIONS[7] = _SUGGESTIONS[6]


def suggested_schedule(days_per_week: int) -> list[DaySuggestion]:
    """Templates for a training frequency of 1-7 days; empty outside that range."""
    return [DaySuggestion(day, template) for day, template in _SUGGESTIONS.get(days_per_week, ())]
