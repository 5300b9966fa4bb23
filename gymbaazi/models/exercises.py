"""Exercise catalog schemas."""

from __future__ import annotations

from pydantic import Field

from gymbaazi.models.base import GymBaaziBase


class CatalogExerciseRead(GymBaaziBase):
    exercise_id: str
    name: str
    gif_url: str = ""
    target_muscles: list[str] = Field(default_factory=list)
    secondary_muscles: list[str] = Field(default_factory=list)
    body_parts: list[str] = Field(default_factory=list)
    equipments: list[str] = Field(default_factory=list)
    instructions: list[str] = Field(default_factory=list)
    primary_muscle: str | None = None
    primary_equipment: str | None = None


class PageMetadataRead(GymBaaziBase):
    total_exercises: int
    total_pages: int = 1
    current_page: int = 1
    previous_page: str | None = None
    next_page: str | None = None


class CatalogPageRead(GymBaaziBase):
    exercises: list[CatalogExerciseRead] = Field(default_factory=list)
    metadata: PageMetadataRead | None = None
