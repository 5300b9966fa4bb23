"""Shared FastAPI dependencies injected into route handlers.

The lifespan hook in ``gymbaazi.main`` builds one repository, one session
controller and one catalog client per app and parks them on ``app.state``;
these helpers hand them to routes.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Callable

from fastapi import Depends, HTTPException, Request

from gymbaazi.catalog.base import ExerciseCatalog
from gymbaazi.config import Settings, get_settings
from gymbaazi.workouts.repository import WorkoutRepository
from gymbaazi.workouts.session import SessionController


def _state_attr(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise HTTPException(status_code=503, detail="Service is starting up")
    return value


async def get_repository(request: Request) -> WorkoutRepository:
    return _state_attr(request, "repository")


async def get_controller(request: Request) -> SessionController:
    return _state_attr(request, "controller")


async def get_catalog_client(request: Request) -> ExerciseCatalog:
    return _state_attr(request, "catalog")


async def get_today(request: Request) -> date:
    """The user's local calendar date, from the app clock."""
    clock: Callable[[], datetime] = getattr(request.app.state, "clock", datetime.now)
    return clock().date()


# Annotated shortcuts for route signatures
AppSettings = Annotated[Settings, Depends(get_settings)]
Repository = Annotated[WorkoutRepository, Depends(get_repository)]
Controller = Annotated[SessionController, Depends(get_controller)]
Catalog = Annotated[ExerciseCatalog, Depends(get_catalog_client)]
Today = Annotated[date, Depends(get_today)]
