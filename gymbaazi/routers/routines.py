"""Per-category routine editing for the Push/Pull/Legs rotation."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException

from gymbaazi.dependencies import Repository
from gymbaazi.models.schedule import MoveExerciseRequest, RoutineRead, RoutineUpdate
from gymbaazi.models.session import ExerciseSchema
from gymbaazi.workouts.base import Exercise, WorkoutType
from gymbaazi.workouts.validation import validate_sets

router = APIRouter(prefix="/routines", tags=["routines"])


def _rotation_type(workout_type: WorkoutType) -> WorkoutType:
    if workout_type is WorkoutType.CUSTOM:
        raise HTTPException(status_code=404, detail="Custom days are edited under /schedule/days")
    return workout_type


def _exercise(item: ExerciseSchema) -> Exercise:
    error = validate_sets(item.sets)
    if error is not None:
        raise error
    return Exercise.from_dict(item.model_dump())


@router.get("", response_model=list[RoutineRead])
def list_routines(repository: Repository) -> Any:
    return [RoutineRead.model_validate(r) for r in repository.get_routines().values()]


@router.get("/{workout_type}", response_model=RoutineRead)
def get_routine(workout_type: WorkoutType, repository: Repository) -> Any:
    return RoutineRead.model_validate(repository.get_routine(_rotation_type(workout_type)))


@router.put("/{workout_type}", response_model=RoutineRead)
def update_routine(workout_type: WorkoutType, body: RoutineUpdate, repository: Repository) -> Any:
    routine = repository.get_routine(_rotation_type(workout_type))
    if body.title is not None:
        routine.title = body.title
    if body.subtitle is not None:
        routine.subtitle = body.subtitle
    if body.exercises is not None:
        routine.exercises = [_exercise(e) for e in body.exercises]
    if body.warmup is not None:
        routine.warmup = body.warmup
    if body.cooldown is not None:
        routine.cooldown = body.cooldown
    repository.save_routine(routine)
    return RoutineRead.model_validate(routine)


@router.post("/{workout_type}/reset", response_model=RoutineRead)
def reset_routine(workout_type: WorkoutType, repository: Repository) -> Any:
    return RoutineRead.model_validate(repository.reset_routine(_rotation_type(workout_type)))


@router.post("/{workout_type}/exercises", response_model=RoutineRead, status_code=201)
def add_exercise(workout_type: WorkoutType, body: ExerciseSchema, repository: Repository) -> Any:
    routine = repository.add_exercise_to_routine(_rotation_type(workout_type), _exercise(body))
    return RoutineRead.model_validate(routine)


@router.delete("/{workout_type}/exercises/{index}", response_model=RoutineRead)
def remove_exercise(workout_type: WorkoutType, index: int, repository: Repository) -> Any:
    routine = repository.remove_exercise_from_routine(_rotation_type(workout_type), index)
    return RoutineRead.model_validate(routine)


@router.post("/{workout_type}/exercises/move", response_model=RoutineRead)
def move_exercise(
    workout_type: WorkoutType, body: MoveExerciseRequest, repository: Repository
) -> Any:
    routine = repository.move_exercise_in_routine(
        _rotation_type(workout_type), body.source, body.destination
    )
    return RoutineRead.model_validate(routine)
