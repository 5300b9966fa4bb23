"""Workout session state machine.

States::

    IDLE ──start──▶ RUNNING ◀──resume/pause──▶ PAUSED
      ▲                 │                         │
      └──complete/reset─┴─────────────────────────┘
    IDLE ──recover──▶ PAUSED

The controller is the single owner of the in-progress session.  Every
transition runs under one coarse lock, so hosts that drive it from several
threads (HTTP workers plus the tick task) see each transition atomically.

Persistence is best-effort: each transition that leaves the session active
rewrites the recovery snapshot.  A failed write is logged, the in-memory
state stays authoritative, and the next mutating transition tries again.
Completion is the exception: the session log must be stored before the
session is cleared, so a history write failure propagates and the session
stays active.
"""

from __future__ import annotations

import copy
import logging
import math
import threading
from datetime import datetime
from typing import Callable

from gymbaazi.workouts.base import (
    RecoverySnapshot,
    SessionLog,
    SessionState,
    SessionStatus,
    SetRecord,
    WorkoutDayAssignment,
)
from gymbaazi.workouts.config_loader import WorkoutConfig, get_workout_config
from gymbaazi.workouts.errors import InvalidTransition, PersistenceError
from gymbaazi.workouts.repository import WorkoutRepository
from gymbaazi.workouts.routines import parse_target_reps
from gymbaazi.workouts.ticker import AsyncioTickScheduler, TickScheduler

logger = logging.getLogger("gymbaazi.workouts.session")

Observer = Callable[[SessionState], None]


def build_sets(assignment: WorkoutDayAssignment, default_reps: int = 10) -> list[SetRecord]:
    """One SetRecord per exercise × target set count, in exercise order."""
    sets: list[SetRecord] = []
    for exercise in assignment.exercises:
        seed = parse_target_reps(exercise.reps, default_reps)
        for number in range(1, exercise.sets + 1):
            sets.append(
                SetRecord(
                    exercise_id=exercise.id,
                    exercise_name=exercise.name,
                    set_number=number,
                    target_reps=exercise.reps,
                    actual_reps=seed,
                    weight=0.0,
                    completed=False,
                )
            )
    return sets


class SessionController:
    """Owns the active workout session and its transitions.

    Args:
        repository: Storage for the recovery snapshot and history.
        ticker:     Tick source; defaults to an asyncio scheduler using the
                    configured interval.
        clock:      Returns the current local time.  Injected for tests.
        config:     Workout config (defaults to the global singleton).

    Usage::

        controller = SessionController(repository, ticker=ManualTickScheduler())
        controller.start(assignment)
        controller.update_set("push_1", 0, weight=60, reps=8)
        controller.toggle_set_completion("push_1", 0)
    """

    def __init__(
        self,
        repository: WorkoutRepository,
        ticker: TickScheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
        config: WorkoutConfig | None = None,
    ) -> None:
        self.repository = repository
        self.config = config or get_workout_config()
        self.ticker = ticker or AsyncioTickScheduler(self.config.session.tick_interval_seconds)
        self.clock = clock

        self._lock = threading.RLock()
        self._observers: list[Observer] = []
        self._clear()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        with self._lock:
            return self._status

    @property
    def elapsed_seconds(self) -> int:
        with self._lock:
            return self._elapsed

    @property
    def state(self) -> SessionState:
        """Snapshot of the session; mutating it does not affect the controller."""
        with self._lock:
            return SessionState(
                status=self._status,
                assignment=copy.deepcopy(self._assignment),
                start_timestamp=self._start_timestamp,
                elapsed_seconds=self._elapsed,
                sets=copy.deepcopy(self._sets),
                last_persisted_at=self._last_persisted_at,
            )

    def sets_for(self, exercise_id: str) -> list[SetRecord]:
        with self._lock:
            return [copy.copy(s) for s in self._sets if s.exercise_id == exercise_id]

    def all_sets_completed(self) -> bool:
        """True when there is at least one set and every set is completed."""
        with self._lock:
            return bool(self._sets) and all(s.completed for s in self._sets)

    def completion_progress(self) -> float:
        with self._lock:
            if not self._sets:
                return 0.0
            return sum(1 for s in self._sets if s.completed) / len(self._sets)

    def has_completed_today(self) -> bool:
        log = self.repository.get_workout_log(self.clock().date())
        return bool(log and log.completed)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register ``observer`` for state changes.  Returns an unsubscribe callable."""
        with self._lock:
            self._observers.append(observer)

        def _unsubscribe() -> None:
            with self._lock:
                if observer in self._observers:
                    self._observers.remove(observer)

        return _unsubscribe

    def _notify(self) -> None:
        if not self._observers:
            return
        state = self.state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Session observer %r raised", observer)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def start(self, assignment: WorkoutDayAssignment) -> SessionState:
        """Begin a session for ``assignment``.  Valid only from IDLE."""
        with self._lock:
            self._require({SessionStatus.IDLE}, "start")
            self._assignment = copy.deepcopy(assignment)
            self._sets = build_sets(assignment, self.config.session.default_target_reps)
            self._start_timestamp = self.clock()
            self._elapsed = 0
            self._status = SessionStatus.RUNNING
            try:
                self.ticker.start(self.tick)
            except Exception:
                logger.exception("Tick source failed to start; session not started")
                self._clear()
                raise
            self._persist_snapshot()
            logger.info(
                "Session started: %s (%d sets)", self._assignment.label, len(self._sets)
            )
        self._notify()
        return self.state

    def pause(self) -> SessionState:
        with self._lock:
            self._require({SessionStatus.RUNNING}, "pause")
            self.ticker.stop()
            self._status = SessionStatus.PAUSED
            self._persist_snapshot()
            logger.info("Session paused at %ds", self._elapsed)
        self._notify()
        return self.state

    def resume(self) -> SessionState:
        with self._lock:
            self._require({SessionStatus.PAUSED}, "resume")
            self.ticker.start(self.tick)
            self._status = SessionStatus.RUNNING
            self._persist_snapshot()
            logger.info("Session resumed at %ds", self._elapsed)
        self._notify()
        return self.state

    def tick(self) -> None:
        """Advance elapsed time by one second.  No-op unless RUNNING."""
        with self._lock:
            if self._status is not SessionStatus.RUNNING:
                return
            self._elapsed += 1
        self._notify()

    def update_set(self, exercise_id: str, set_index: int, weight: float, reps: int) -> bool:
        """Set weight and reps on the ``set_index``-th (0-based) set of an exercise.

        Returns False, changing nothing, when the pair does not exist.

        Raises:
            InvalidTransition: When no session is active.
        """
        with self._lock:
            self._require({SessionStatus.RUNNING, SessionStatus.PAUSED}, "update a set")
            record = self._find_set(exercise_id, set_index)
            if record is None:
                logger.debug("update_set ignored: no set %s[%d]", exercise_id, set_index)
                return False
            record.weight = float(weight)
            record.actual_reps = int(reps)
            self._persist_snapshot()
        self._notify()
        return True

    def toggle_set_completion(self, exercise_id: str, set_index: int) -> bool:
        """Flip the completed flag on one set.  False when the pair does not exist."""
        with self._lock:
            self._require({SessionStatus.RUNNING, SessionStatus.PAUSED}, "toggle a set")
            record = self._find_set(exercise_id, set_index)
            if record is None:
                logger.debug("toggle ignored: no set %s[%d]", exercise_id, set_index)
                return False
            record.completed = not record.completed
            self._persist_snapshot()
        self._notify()
        return True

    def complete_set(self, exercise_id: str, set_index: int) -> bool:
        """Mark one set completed (idempotent).  False when the pair does not exist."""
        with self._lock:
            self._require({SessionStatus.RUNNING, SessionStatus.PAUSED}, "complete a set")
            record = self._find_set(exercise_id, set_index)
            if record is None:
                return False
            if not record.completed:
                record.completed = True
                self._persist_snapshot()
        self._notify()
        return True

    def complete(self) -> SessionLog:
        """Finish the session, store its log, and return to IDLE.

        Raises:
            InvalidTransition: When idle, or when any set is not completed.
            PersistenceError:  When the log cannot be stored; the session
                               stays active so the user can retry.
        """
        with self._lock:
            self._require({SessionStatus.RUNNING, SessionStatus.PAUSED}, "complete")
            if not self._sets:
                raise InvalidTransition("complete", self._status.value, "session has no sets")
            pending = sum(1 for s in self._sets if not s.completed)
            if pending:
                raise InvalidTransition(
                    "complete", self._status.value, f"{pending} set(s) not completed"
                )

            log = SessionLog(
                date=self.clock().date(),
                workout_type=self._assignment.workout_type,
                day_name=self._assignment.label,
                completed=True,
                duration_seconds=self._elapsed,
                sets=copy.deepcopy(self._sets),
            )
            self.repository.save_workout_log(log)

            self.ticker.stop()
            self._clear()
            self._discard_snapshot()
            logger.info(
                "Session completed: %s, %ds, volume %.1f",
                log.day_name,
                log.duration_seconds,
                log.total_volume,
            )
        self._notify()
        return log

    def reset(self) -> SessionState:
        """Abandon the active session without logging it."""
        with self._lock:
            self._require({SessionStatus.RUNNING, SessionStatus.PAUSED}, "reset")
            self.ticker.stop()
            self._clear()
            self._discard_snapshot()
            logger.info("Session reset")
        self._notify()
        return self.state

    def recover(self, snapshot: RecoverySnapshot | None = None) -> bool:
        """Restore a crashed session into PAUSED.

        With no ``snapshot`` the stored one is used.  A snapshot at or past
        the recovery window is discarded and the controller stays IDLE.

        Returns:
            True if a session was restored.
        """
        with self._lock:
            self._require({SessionStatus.IDLE}, "recover")
            if snapshot is None:
                snapshot = self.repository.load_snapshot()
                if snapshot is None:
                    # Absent or undecodable.
                    self._discard_snapshot()
                    return False

            now = self.clock()
            if snapshot.saved_at is None or snapshot.start_timestamp is None:
                logger.warning("Discarding session snapshot without timestamps")
                self._discard_snapshot()
                return False
            age = snapshot.age_seconds(now)
            window = self.config.session.recovery_window_seconds
            if not snapshot.is_fresh(now, window):
                logger.info("Discarding stale session snapshot (%.0fs old, window %ds)", age, window)
                self._discard_snapshot()
                return False

            self._assignment = copy.deepcopy(snapshot.assignment)
            self._sets = copy.deepcopy(snapshot.sets)
            self._start_timestamp = snapshot.start_timestamp
            self._elapsed = snapshot.elapsed_seconds_at_save + math.floor(max(age, 0.0))
            self._status = SessionStatus.PAUSED
            self._last_persisted_at = snapshot.saved_at
            logger.info(
                "Recovered session %s at %ds (%d sets)",
                self._assignment.label,
                self._elapsed,
                len(self._sets),
            )
        self._notify()
        return True

    def shutdown(self) -> None:
        """Stop the tick source.  Session state and snapshot are left intact."""
        with self._lock:
            self.ticker.stop()
            if self._status is not SessionStatus.IDLE and self._snapshot_dirty:
                self._persist_snapshot()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, allowed: set[SessionStatus], action: str) -> None:
        if self._status not in allowed:
            raise InvalidTransition(action, self._status.value)

    def _find_set(self, exercise_id: str, set_index: int) -> SetRecord | None:
        if set_index < 0:
            return None
        matching = [s for s in self._sets if s.exercise_id == exercise_id]
        if set_index >= len(matching):
            return None
        return matching[set_index]

    def _clear(self) -> None:
        self._status = SessionStatus.IDLE
        self._assignment: WorkoutDayAssignment | None = None
        self._start_timestamp: datetime | None = None
        self._elapsed = 0
        self._sets: list[SetRecord] = []
        self._last_persisted_at: datetime | None = None
        self._snapshot_dirty = False

    def _persist_snapshot(self) -> None:
        now = self.clock()
        snapshot = RecoverySnapshot(
            assignment=self._assignment,
            start_timestamp=self._start_timestamp,
            elapsed_seconds_at_save=self._elapsed,
            sets=self._sets,
            saved_at=now,
        )
        try:
            self.repository.save_snapshot(snapshot)
        except PersistenceError as exc:
            self._snapshot_dirty = True
            logger.warning("Snapshot write failed; will retry on next change: %s", exc)
            return
        self._snapshot_dirty = False
        self._last_persisted_at = now

    def _discard_snapshot(self) -> None:
        try:
            self.repository.clear_snapshot()
        except PersistenceError as exc:
            logger.warning("Could not clear session snapshot: %s", exc)
