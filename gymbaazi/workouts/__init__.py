"""GymBaazi workout core.

Plans the week, runs the live workout session, and keeps the history the
streak is computed from.

Core modules:
    base          : canonical data models shared across the package
    config_loader : load/validate/hot-reload workout_config.yaml
    schedule      : resolve a date to its workout assignment
    session       : session state machine (start, pause, resume, complete, recover)
    ticker        : cancellable tick sources driving the session clock
    streak        : consecutive-workout streak walk
    stats         : lifetime totals for the profile screen
    repository    : typed persistence over a key/value store
    routines      : stock PPL routines and quick-start templates
    validation    : profile and workout form validators
    formatting    : duration, weight and height display helpers
"""

from gymbaazi.workouts.base import (
    CustomWorkoutDay,
    Exercise,
    RecoverySnapshot,
    ScheduleDefinition,
    SessionLog,
    SessionState,
    SessionStatus,
    SetRecord,
    UserProfile,
    UserSettings,
    WeightUnit,
    WorkoutDayAssignment,
    WorkoutRoutine,
    WorkoutType,
)
from gymbaazi.workouts.config_loader import WorkoutConfig, get_workout_config
from gymbaazi.workouts.errors import (
    InvalidTransition,
    NotFoundError,
    PersistenceError,
    WorkoutError,
)

__all__ = [
    "CustomWorkoutDay",
    "Exercise",
    "RecoverySnapshot",
    "ScheduleDefinition",
    "SessionLog",
    "SessionState",
    "SessionStatus",
    "SetRecord",
    "UserProfile",
    "UserSettings",
    "WeightUnit",
    "WorkoutDayAssignment",
    "WorkoutRoutine",
    "WorkoutType",
    "WorkoutConfig",
    "get_workout_config",
    "InvalidTransition",
    "NotFoundError",
    "PersistenceError",
    "WorkoutError",
]
