"""Exceptions raised by the workout core."""

from __future__ import annotations


class WorkoutError(Exception):
    """Base class for workout core failures."""


class InvalidTransition(WorkoutError):
    """An operation was requested in a session state that does not permit it."""

    def __init__(self, action: str, state: str, detail: str | None = None) -> None:
        self.action = action
        self.state = state
        self.detail = detail
        message = f"Cannot {action} while session is {state}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PersistenceError(WorkoutError):
    """The storage engine failed to read or write a record."""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        self.reason = reason
        super().__init__(f"Storage failure for '{key}': {reason}")


class NotFoundError(WorkoutError):
    """A referenced workout day, routine exercise or log does not exist."""
