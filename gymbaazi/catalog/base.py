"""Catalog interface and canonical exercise models.

Every exercise catalog source implements ``ExerciseCatalog`` and returns
these dataclasses, so the HTTP layer never sees a provider's wire format.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass
class CatalogExercise:
    """One exercise from the catalog.

    Attributes:
        exercise_id:       Provider identifier.
        name:              Display name.
        gif_url:           Animated demonstration.
        target_muscles:    Primary muscles worked.
        secondary_muscles: Assisting muscles.
        body_parts:        Body regions.
        equipments:        Required equipment.
        instructions:      Ordered how-to steps.
    """

    exercise_id: str
    name: str
    gif_url: str = ""
    target_muscles: list[str] = field(default_factory=list)
    secondary_muscles: list[str] = field(default_factory=list)
    body_parts: list[str] = field(default_factory=list)
    equipments: list[str] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)

    @property
    def primary_muscle(self) -> str | None:
        return self.target_muscles[0] if self.target_muscles else None

    @property
    def primary_equipment(self) -> str | None:
        return self.equipments[0] if self.equipments else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "exercise_id": self.exercise_id,
            "name": self.name,
            "gif_url": self.gif_url,
            "target_muscles": list(self.target_muscles),
            "secondary_muscles": list(self.secondary_muscles),
            "body_parts": list(self.body_parts),
            "equipments": list(self.equipments),
            "instructions": list(self.instructions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CatalogExercise:
        return cls(
            exercise_id=data["exercise_id"],
            name=data["name"],
            gif_url=data.get("gif_url", ""),
            target_muscles=list(data.get("target_muscles", [])),
            secondary_muscles=list(data.get("secondary_muscles", [])),
            body_parts=list(data.get("body_parts", [])),
            equipments=list(data.get("equipments", [])),
            instructions=list(data.get("instructions", [])),
        )


@dataclass
class PageMetadata:
    """Pagination details returned alongside a page of exercises."""

    total_exercises: int
    total_pages: int = 1
    current_page: int = 1
    previous_page: str | None = None
    next_page: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_exercises": self.total_exercises,
            "total_pages": self.total_pages,
            "current_page": self.current_page,
            "previous_page": self.previous_page,
            "next_page": self.next_page,
        }


@dataclass
class CatalogPage:
    exercises: list[CatalogExercise] = field(default_factory=list)
    metadata: PageMetadata | None = None


class ExerciseCatalog(ABC):
    """Abstract exercise catalog.

    Implementations are async; list-style taxonomy calls return plain names.
    """

    SOURCE_ID: str = ""
    DISPLAY_NAME: str = ""

    @abstractmethod
    async def list_exercises(
        self,
        offset: int = 0,
        limit: int = 25,
        search: str | None = None,
        sort_by: str = "targetMuscles",
        sort_order: str = "asc",
    ) -> CatalogPage:
        """Page through all exercises, optionally filtered by a search string."""

    @abstractmethod
    async def search_exercises(
        self, query: str, offset: int = 0, limit: int = 25, threshold: float = 0.3
    ) -> CatalogPage:
        """Fuzzy search by name."""

    @abstractmethod
    async def get_exercise(self, exercise_id: str) -> CatalogExercise:
        """Fetch one exercise.  Raises ``NotFoundError`` for unknown ids."""

    @abstractmethod
    async def filter_exercises(
        self,
        muscles: list[str] | None = None,
        equipment: list[str] | None = None,
        body_parts: list[str] | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 25,
    ) -> CatalogPage:
        """Filter by several criteria at once."""

    @abstractmethod
    async def exercises_by_muscle(
        self, muscle: str, include_secondary: bool = False, offset: int = 0, limit: int = 25
    ) -> CatalogPage:
        ...

    @abstractmethod
    async def exercises_by_equipment(
        self, equipment: str, offset: int = 0, limit: int = 25
    ) -> CatalogPage:
        ...

    @abstractmethod
    async def exercises_by_body_part(
        self, body_part: str, offset: int = 0, limit: int = 25, use_cache: bool = True
    ) -> CatalogPage:
        ...

    @abstractmethod
    async def list_muscles(self) -> list[str]:
        ...

    @abstractmethod
    async def list_equipment(self) -> list[str]:
        ...

    @abstractmethod
    async def list_body_parts(self) -> list[str]:
        ...

    def clear_cache(self) -> None:
        """Drop any cached responses.  No-op for uncached sources."""
