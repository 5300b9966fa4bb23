"""Durable storage for profile, settings, schedule, routines, history and the
recovery snapshot.

All records are JSON documents in a ``KeyValueStore`` under fixed keys.  The
repository is the only code that knows those keys; the controller and HTTP
layer deal in dataclasses.

History is a single document keyed by ISO calendar date, so a second
completed session on the same day replaces the first (last write wins).
"""

from __future__ import annotations

import logging
import uuid
from datetime import date

from gymbaazi.services.storage import KeyValueStore, MemoryStore
from gymbaazi.workouts.base import (
    CustomWorkoutDay,
    Exercise,
    RecoverySnapshot,
    ScheduleDefinition,
    SessionLog,
    UserProfile,
    UserSettings,
    WorkoutRoutine,
    WorkoutType,
)
from gymbaazi.workouts.errors import NotFoundError
from gymbaazi.workouts.routines import DEFAULT_ROUTINES, default_routine

logger = logging.getLogger("gymbaazi.workouts.repository")

KEY_ONBOARDED = "gymbaazi_isOnboarded"
KEY_PROFILE = "gymbaazi_userProfile"
KEY_HISTORY = "gymbaazi_workoutLogs"
KEY_ROUTINES = "gymbaazi_customRoutines"
KEY_SCHEDULE = "gymbaazi_workoutSchedule"
KEY_SETTINGS = "gymbaazi_userSettings"
KEY_SNAPSHOT = "gymbaazi_lastActiveWorkout"

ALL_KEYS = (
    KEY_ONBOARDED,
    KEY_PROFILE,
    KEY_HISTORY,
    KEY_ROUTINES,
    KEY_SCHEDULE,
    KEY_SETTINGS,
    KEY_SNAPSHOT,
)


class WorkoutRepository:
    """Typed facade over a key/value store.

    Args:
        store: Storage engine.  Defaults to an in-memory store.
    """

    def __init__(self, store: KeyValueStore | None = None) -> None:
        self.store = store or MemoryStore()

    # ------------------------------------------------------------------
    # Decoding helper
    # ------------------------------------------------------------------

    def _load_record(self, key: str, decoder):
        raw = self.store.get(key)
        if raw is None:
            return None
        try:
            return decoder(raw)
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Discarding undecodable record %s: %s", key, exc)
            return None

    # ------------------------------------------------------------------
    # Onboarding / profile / settings
    # ------------------------------------------------------------------

    def is_onboarded(self) -> bool:
        return bool(self.store.get(KEY_ONBOARDED))

    def set_onboarded(self, value: bool) -> None:
        self.store.set(KEY_ONBOARDED, bool(value))

    def get_profile(self) -> UserProfile | None:
        return self._load_record(KEY_PROFILE, UserProfile.from_dict)

    def save_profile(self, profile: UserProfile | None) -> None:
        if profile is None:
            self.store.delete(KEY_PROFILE)
            return
        self.store.set(KEY_PROFILE, profile.to_dict())

    def update_profile(
        self,
        *,
        name: str | None = None,
        age: int | None = None,
        height_cm: float | None = None,
        weight_kg: float | None = None,
    ) -> UserProfile | None:
        """Patch the stored profile.  Returns None when no profile exists."""
        profile = self.get_profile()
        if profile is None:
            return None
        if name is not None:
            profile.name = name
        if age is not None:
            profile.age = age
        if height_cm is not None:
            profile.height_cm = height_cm
        if weight_kg is not None:
            profile.weight_kg = weight_kg
        self.save_profile(profile)
        return profile

    def complete_onboarding(self, profile: UserProfile) -> None:
        self.save_profile(profile)
        self.set_onboarded(True)
        logger.info("Onboarding completed for %s", profile.name)

    def get_settings(self) -> UserSettings:
        return self._load_record(KEY_SETTINGS, UserSettings.from_dict) or UserSettings()

    def save_settings(self, settings: UserSettings) -> None:
        self.store.set(KEY_SETTINGS, settings.to_dict())

    # ------------------------------------------------------------------
    # Schedule
    # ------------------------------------------------------------------

    def get_schedule(self) -> ScheduleDefinition:
        return self._load_record(KEY_SCHEDULE, ScheduleDefinition.from_dict) or ScheduleDefinition()

    def save_schedule(self, schedule: ScheduleDefinition) -> None:
        self.store.set(KEY_SCHEDULE, schedule.to_dict())

    def add_workout_day(self, day: CustomWorkoutDay) -> ScheduleDefinition:
        schedule = self.get_schedule()
        schedule.days.append(day)
        self.save_schedule(schedule)
        return schedule

    def update_workout_day(self, day: CustomWorkoutDay) -> ScheduleDefinition:
        """Replace the stored day with the same id.

        Raises:
            NotFoundError: If no day has ``day.id``.
        """
        schedule = self.get_schedule()
        for i, existing in enumerate(schedule.days):
            if existing.id == day.id:
                schedule.days[i] = day
                self.save_schedule(schedule)
                return schedule
        raise NotFoundError(f"Workout day {day.id} not found")

    def delete_workout_day(self, day_id: uuid.UUID) -> bool:
        schedule = self.get_schedule()
        remaining = [d for d in schedule.days if d.id != day_id]
        if len(remaining) == len(schedule.days):
            return False
        schedule.days = remaining
        self.save_schedule(schedule)
        return True

    # ------------------------------------------------------------------
    # Routines
    # ------------------------------------------------------------------

    def _custom_routines(self) -> dict[str, WorkoutRoutine]:
        raw = self.store.get(KEY_ROUTINES) or {}
        routines: dict[str, WorkoutRoutine] = {}
        for key, value in raw.items():
            try:
                routines[key] = WorkoutRoutine.from_dict(value)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Discarding undecodable routine %s: %s", key, exc)
        return routines

    def _save_custom_routines(self, routines: dict[str, WorkoutRoutine]) -> None:
        self.store.set(KEY_ROUTINES, {k: r.to_dict() for k, r in routines.items()})

    def get_routines(self) -> dict[WorkoutType, WorkoutRoutine]:
        """Effective routine per rotation category (user override or stock)."""
        return {t: self.get_routine(t) for t in DEFAULT_ROUTINES}

    def get_routine(self, workout_type: WorkoutType) -> WorkoutRoutine:
        custom = self._custom_routines().get(workout_type.value)
        if custom is not None:
            return custom
        return default_routine(workout_type)

    def save_routine(self, routine: WorkoutRoutine) -> None:
        routines = self._custom_routines()
        routines[routine.type.value] = routine
        self._save_custom_routines(routines)

    def reset_routine(self, workout_type: WorkoutType) -> WorkoutRoutine:
        routines = self._custom_routines()
        if routines.pop(workout_type.value, None) is not None:
            self._save_custom_routines(routines)
        return default_routine(workout_type)

    def add_exercise_to_routine(self, workout_type: WorkoutType, exercise: Exercise) -> WorkoutRoutine:
        routine = self.get_routine(workout_type)
        routine.exercises.append(exercise)
        self.save_routine(routine)
        return routine

    def remove_exercise_from_routine(self, workout_type: WorkoutType, index: int) -> WorkoutRoutine:
        """Remove the exercise at ``index``.

        Raises:
            NotFoundError: If ``index`` is out of range.
        """
        routine = self.get_routine(workout_type)
        if not 0 <= index < len(routine.exercises):
            raise NotFoundError(f"No exercise at index {index} in {workout_type.value} routine")
        del routine.exercises[index]
        self.save_routine(routine)
        return routine

    def move_exercise_in_routine(
        self, workout_type: WorkoutType, source: int, destination: int
    ) -> WorkoutRoutine:
        """Move one exercise so it ends up at ``destination`` (clamped to the list)."""
        routine = self.get_routine(workout_type)
        if not 0 <= source < len(routine.exercises):
            raise NotFoundError(f"No exercise at index {source} in {workout_type.value} routine")
        exercise = routine.exercises.pop(source)
        destination = max(0, min(destination, len(routine.exercises)))
        routine.exercises.insert(destination, exercise)
        self.save_routine(routine)
        return routine

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    def _history(self) -> dict[date, SessionLog]:
        raw = self.store.get(KEY_HISTORY) or {}
        history: dict[date, SessionLog] = {}
        for key, value in raw.items():
            try:
                log = SessionLog.from_dict(value)
            except (KeyError, TypeError, ValueError, AttributeError) as exc:
                logger.warning("Discarding undecodable log for %s: %s", key, exc)
                continue
            if log.date is not None:
                history[log.date] = log
        return history

    def _save_history(self, history: dict[date, SessionLog]) -> None:
        self.store.set(KEY_HISTORY, {d.isoformat(): log.to_dict() for d, log in history.items()})

    def load_history(self) -> dict[date, SessionLog]:
        """All logs keyed by calendar date."""
        return self._history()

    def save_workout_log(self, log: SessionLog) -> None:
        """Store ``log`` under its date, replacing any log already there."""
        history = self._history()
        if log.date in history:
            logger.info("Replacing existing log for %s", log.date)
        history[log.date] = log
        self._save_history(history)

    def get_workout_log(self, day: date) -> SessionLog | None:
        return self._history().get(day)

    def list_workout_logs(self) -> list[SessionLog]:
        """All logs, newest first."""
        return sorted(self._history().values(), key=lambda log: log.date, reverse=True)

    def get_workout_logs(self, start: date, end: date) -> list[SessionLog]:
        """Logs with ``start <= date <= end``, newest first."""
        return [log for log in self.list_workout_logs() if start <= log.date <= end]

    def delete_workout_log(self, log_id: uuid.UUID) -> bool:
        history = self._history()
        kept = {d: log for d, log in history.items() if log.id != log_id}
        if len(kept) == len(history):
            return False
        self._save_history(kept)
        return True

    # ------------------------------------------------------------------
    # Recovery snapshot
    # ------------------------------------------------------------------

    def load_snapshot(self) -> RecoverySnapshot | None:
        return self._load_record(KEY_SNAPSHOT, RecoverySnapshot.from_dict)

    def save_snapshot(self, snapshot: RecoverySnapshot) -> None:
        self.store.set(KEY_SNAPSHOT, snapshot.to_dict())

    def clear_snapshot(self) -> None:
        self.store.delete(KEY_SNAPSHOT)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------

    def clear_all(self) -> None:
        for key in ALL_KEYS:
            self.store.delete(key)
        logger.info("Cleared all stored data")
