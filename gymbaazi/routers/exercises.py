"""Exercise catalog proxy.

Catalog failures surface through the app's ``CatalogError`` handler
(404, 429 or 502).
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Query

from gymbaazi.dependencies import Catalog
from gymbaazi.models.exercises import CatalogExerciseRead, CatalogPageRead

router = APIRouter(prefix="/exercises", tags=["exercises"])
logger = logging.getLogger("gymbaazi.routers.exercises")


def _csv(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [part.strip() for part in value.split(",") if part.strip()]


@router.get("", response_model=CatalogPageRead)
async def list_exercises(
    catalog: Catalog,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
    search: str | None = Query(default=None),
    muscles: str | None = Query(default=None, description="Comma-separated"),
    equipment: str | None = Query(default=None, description="Comma-separated"),
    body_parts: str | None = Query(default=None, description="Comma-separated"),
) -> Any:
    if muscles or equipment or body_parts:
        page = await catalog.filter_exercises(
            muscles=_csv(muscles),
            equipment=_csv(equipment),
            body_parts=_csv(body_parts),
            search=search,
            offset=offset,
            limit=limit,
        )
    else:
        page = await catalog.list_exercises(offset=offset, limit=limit, search=search)
    return CatalogPageRead.model_validate(page)


@router.get("/search", response_model=CatalogPageRead)
async def search_exercises(
    catalog: Catalog,
    q: str = Query(..., min_length=1),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
    threshold: float = Query(default=0.3, ge=0.0, le=1.0),
) -> Any:
    page = await catalog.search_exercises(q, offset=offset, limit=limit, threshold=threshold)
    return CatalogPageRead.model_validate(page)


@router.get("/muscles", response_model=list[str])
async def list_muscles(catalog: Catalog) -> Any:
    return await catalog.list_muscles()


@router.get("/equipment", response_model=list[str])
async def list_equipment(catalog: Catalog) -> Any:
    return await catalog.list_equipment()


@router.get("/bodyparts", response_model=list[str])
async def list_body_parts(catalog: Catalog) -> Any:
    return await catalog.list_body_parts()


@router.get("/muscles/{muscle}", response_model=CatalogPageRead)
async def exercises_by_muscle(
    muscle: str,
    catalog: Catalog,
    include_secondary: bool = Query(default=False),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
) -> Any:
    page = await catalog.exercises_by_muscle(muscle, include_secondary, offset, limit)
    return CatalogPageRead.model_validate(page)


@router.get("/equipment/{equipment}", response_model=CatalogPageRead)
async def exercises_by_equipment(
    equipment: str,
    catalog: Catalog,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
) -> Any:
    page = await catalog.exercises_by_equipment(equipment, offset, limit)
    return CatalogPageRead.model_validate(page)


@router.get("/bodyparts/{body_part}", response_model=CatalogPageRead)
async def exercises_by_body_part(
    body_part: str,
    catalog: Catalog,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=25, ge=1, le=100),
) -> Any:
    page = await catalog.exercises_by_body_part(body_part, offset, limit)
    return CatalogPageRead.model_validate(page)


@router.delete("/cache", status_code=204)
def clear_cache(catalog: Catalog) -> None:
    catalog.clear_cache()


@router.get("/{exercise_id}", response_model=CatalogExerciseRead)
async def get_exercise(exercise_id: str, catalog: Catalog) -> Any:
    return CatalogExerciseRead.model_validate(await catalog.get_exercise(exercise_id))
