"""Live workout session endpoints.

The app owns a single ``SessionController``; these routes drive its
transitions.  ``InvalidTransition`` surfaces as 409 through the app's
exception handlers.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from gymbaazi.dependencies import Controller, Repository, Today
from gymbaazi.models.session import (
    SessionLogRead,
    SessionStateRead,
    StartSessionRequest,
    UpdateSetRequest,
)
from gymbaazi.workouts.base import WorkoutDayAssignment, WorkoutType
from gymbaazi.workouts.schedule import resolve
from gymbaazi.workouts.validation import (
    ValidationResult,
    validate_exercise_weight,
    validate_reps,
)

router = APIRouter(prefix="/session", tags=["session"])
logger = logging.getLogger("gymbaazi.routers.session")


def _assignment_for(body: StartSessionRequest, repository: Repository, today) -> WorkoutDayAssignment:
    schedule = repository.get_schedule()
    if body.day_id is not None:
        day = schedule.day_by_id(body.day_id)
        if day is None:
            raise HTTPException(status_code=404, detail="Workout day not found")
        return WorkoutDayAssignment(
            identifier=str(day.id),
            label=day.name,
            workout_type=WorkoutType.CUSTOM,
            exercises=day.exercises,
        )
    if body.workout_type is not None:
        if body.workout_type is WorkoutType.CUSTOM:
            raise HTTPException(status_code=400, detail="Pass day_id to start a custom day")
        routine = repository.get_routine(body.workout_type)
        return WorkoutDayAssignment(
            identifier=body.workout_type.value,
            label=routine.title or body.workout_type.display_name,
            workout_type=body.workout_type,
            exercises=routine.exercises,
        )
    return resolve(body.date or today, schedule, repository.get_routines())


@router.get("", response_model=SessionStateRead)
def get_session(controller: Controller) -> Any:
    return SessionStateRead.model_validate(controller.state)


@router.post("/start", response_model=SessionStateRead, status_code=201)
def start_session(
    controller: Controller,
    repository: Repository,
    today: Today,
    body: StartSessionRequest | None = None,
) -> Any:
    assignment = _assignment_for(body or StartSessionRequest(), repository, today)
    if not assignment.exercises:
        raise HTTPException(status_code=400, detail=f"{assignment.label} has no exercises")
    return SessionStateRead.model_validate(controller.start(assignment))


@router.post("/pause", response_model=SessionStateRead)
def pause_session(controller: Controller) -> Any:
    return SessionStateRead.model_validate(controller.pause())


@router.post("/resume", response_model=SessionStateRead)
def resume_session(controller: Controller) -> Any:
    return SessionStateRead.model_validate(controller.resume())


@router.post("/reset", response_model=SessionStateRead)
def reset_session(controller: Controller) -> Any:
    return SessionStateRead.model_validate(controller.reset())


@router.post("/complete", response_model=SessionLogRead)
def complete_session(controller: Controller) -> Any:
    log = controller.complete()
    return SessionLogRead.model_validate(log)


@router.put("/sets/{exercise_id}/{set_index}", response_model=SessionStateRead)
def update_set(
    exercise_id: str, set_index: int, body: UpdateSetRequest, controller: Controller
) -> Any:
    result = ValidationResult()
    result.add(validate_exercise_weight(body.weight), "weight")
    result.add(validate_reps(body.reps), "reps")
    result.raise_if_invalid()

    if not controller.update_set(exercise_id, set_index, body.weight, body.reps):
        raise HTTPException(status_code=404, detail="Set not found")
    return SessionStateRead.model_validate(controller.state)


@router.post("/sets/{exercise_id}/{set_index}/toggle", response_model=SessionStateRead)
def toggle_set(exercise_id: str, set_index: int, controller: Controller) -> Any:
    if not controller.toggle_set_completion(exercise_id, set_index):
        raise HTTPException(status_code=404, detail="Set not found")
    return SessionStateRead.model_validate(controller.state)


@router.post("/sets/{exercise_id}/{set_index}/complete", response_model=SessionStateRead)
def complete_set(exercise_id: str, set_index: int, controller: Controller) -> Any:
    if not controller.complete_set(exercise_id, set_index):
        raise HTTPException(status_code=404, detail="Set not found")
    return SessionStateRead.model_validate(controller.state)
