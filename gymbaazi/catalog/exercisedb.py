"""ExerciseDB API v1 client.

Free, unauthenticated API.  Every request first waits on the shared
sliding-window rate limiter; taxonomy lists are cached for 24 hours and the
first full page of each body part for one hour.

API base: https://www.exercisedb.dev/api/v1

Endpoints used:
    /exercises                      : paginated list with optional search
    /exercises/search               : fuzzy name search
    /exercises/{id}                 : single exercise
    /exercises/filter               : muscles / equipment / body parts filter
    /muscles/{muscle}/exercises     : by target muscle
    /equipments/{name}/exercises    : by equipment
    /bodyparts/{name}/exercises     : by body part
    /muscles, /equipments, /bodyparts : taxonomy lists

Responses are wrapped as ``{"success": bool, "metadata": {...}, "data": ...}``.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from gymbaazi.catalog.base import CatalogExercise, CatalogPage, ExerciseCatalog, PageMetadata
from gymbaazi.catalog.cache import (
    BODY_PARTS_KEY,
    EQUIPMENTS_KEY,
    MUSCLES_KEY,
    DiskCache,
    body_part_key,
    exercise_key,
)
from gymbaazi.catalog.errors import (
    CatalogError,
    DecodingError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from gymbaazi.catalog.rate_limiter import SlidingWindowRateLimiter
from gymbaazi.workouts.config_loader import CatalogConfig, get_workout_config

logger = logging.getLogger("gymbaazi.catalog.exercisedb")


def _parse_exercise(raw: dict[str, Any]) -> CatalogExercise:
    return CatalogExercise(
        exercise_id=str(raw["exerciseId"]),
        name=raw["name"],
        gif_url=raw.get("gifUrl") or "",
        target_muscles=list(raw.get("targetMuscles") or []),
        secondary_muscles=list(raw.get("secondaryMuscles") or []),
        body_parts=list(raw.get("bodyParts") or []),
        equipments=list(raw.get("equipments") or []),
        instructions=list(raw.get("instructions") or []),
    )


def _parse_metadata(raw: dict[str, Any] | None) -> PageMetadata | None:
    if not raw:
        return None
    return PageMetadata(
        total_exercises=int(raw.get("totalExercises", 0)),
        total_pages=int(raw.get("totalPages", 1)),
        current_page=int(raw.get("currentPage", 1)),
        previous_page=raw.get("previousPage"),
        next_page=raw.get("nextPage"),
    )


class ExerciseDBClient(ExerciseCatalog):
    """ExerciseDB catalog source.

    Args:
        config:       Catalog settings (defaults to workout_config.yaml).
        cache:        Disk cache; None disables caching.
        rate_limiter: Shared limiter; one is created from ``config`` if omitted.
        http_client:  Optional pre-configured httpx client (for testing).
    """

    SOURCE_ID = "exercisedb"
    DISPLAY_NAME = "ExerciseDB"

    def __init__(
        self,
        config: CatalogConfig | None = None,
        cache: DiskCache | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or get_workout_config().catalog
        self._base_url = self._config.base_url.rstrip("/")
        self._cache = cache
        self._rate_limiter = rate_limiter or SlidingWindowRateLimiter(
            self._config.max_requests_per_minute,
            self._config.rate_limit_window_seconds,
        )
        self._http_client = http_client

    def _limit(self, limit: int) -> int:
        return max(1, min(limit, self._config.default_page_limit))

    # ------------------------------------------------------------------
    # Exercises
    # ------------------------------------------------------------------

    async def list_exercises(
        self,
        offset: int = 0,
        limit: int = 25,
        search: str | None = None,
        sort_by: str = "targetMuscles",
        sort_order: str = "asc",
    ) -> CatalogPage:
        params: dict[str, Any] = {
            "offset": offset,
            "limit": self._limit(limit),
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }
        if search:
            params["search"] = search
        return await self._get_page("/exercises", params)

    async def search_exercises(
        self, query: str, offset: int = 0, limit: int = 25, threshold: float = 0.3
    ) -> CatalogPage:
        params = {
            "q": query,
            "offset": offset,
            "limit": self._limit(limit),
            "threshold": threshold,
        }
        return await self._get_page("/exercises/search", params)

    async def get_exercise(self, exercise_id: str) -> CatalogExercise:
        key = exercise_key(exercise_id)
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                return CatalogExercise.from_dict(cached)

        body = await self._get(f"/exercises/{quote(exercise_id, safe='')}")
        try:
            exercise = _parse_exercise(body["data"])
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodingError(detail=str(exc)) from exc

        if self._cache is not None:
            self._cache.set(key, exercise.to_dict(), self._config.exercise_ttl_seconds)
        return exercise

    async def filter_exercises(
        self,
        muscles: list[str] | None = None,
        equipment: list[str] | None = None,
        body_parts: list[str] | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 25,
    ) -> CatalogPage:
        params: dict[str, Any] = {"offset": offset, "limit": self._limit(limit)}
        if muscles:
            params["muscles"] = ",".join(muscles)
        if equipment:
            params["equipment"] = ",".join(equipment)
        if body_parts:
            params["bodyParts"] = ",".join(body_parts)
        if search:
            params["search"] = search
        return await self._get_page("/exercises/filter", params)

    async def exercises_by_muscle(
        self, muscle: str, include_secondary: bool = False, offset: int = 0, limit: int = 25
    ) -> CatalogPage:
        params = {
            "offset": offset,
            "limit": self._limit(limit),
            "includeSecondary": "true" if include_secondary else "false",
        }
        return await self._get_page(f"/muscles/{quote(muscle, safe='')}/exercises", params)

    async def exercises_by_equipment(
        self, equipment: str, offset: int = 0, limit: int = 25
    ) -> CatalogPage:
        params = {"offset": offset, "limit": self._limit(limit)}
        return await self._get_page(f"/equipments/{quote(equipment, safe='')}/exercises", params)

    async def exercises_by_body_part(
        self, body_part: str, offset: int = 0, limit: int = 25, use_cache: bool = True
    ) -> CatalogPage:
        """Exercises for a body part.

        The first page of a full-size request is cached along with the total
        count; count-only requests (small ``limit``) always hit the API but still
        refresh the cached count.
        """
        key = body_part_key(body_part)
        count_key = f"{key}_count"
        cacheable = self._cache is not None and offset == 0 and limit >= self._config.default_page_limit

        if cacheable and use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                count = self._cache.get(count_key)
                metadata = PageMetadata(total_exercises=int(count)) if count is not None else None
                return CatalogPage(
                    exercises=[CatalogExercise.from_dict(e) for e in cached],
                    metadata=metadata,
                )

        page = await self._get_page(
            f"/bodyparts/{quote(body_part, safe='')}/exercises",
            {"offset": offset, "limit": self._limit(limit)},
        )

        if self._cache is not None:
            ttl = self._config.exercise_ttl_seconds
            if cacheable:
                self._cache.set(key, [e.to_dict() for e in page.exercises], ttl)
            if page.metadata is not None:
                self._cache.set(count_key, page.metadata.total_exercises, ttl)
        return page

    # ------------------------------------------------------------------
    # Taxonomy lists
    # ------------------------------------------------------------------

    async def list_muscles(self) -> list[str]:
        return await self._get_names("/muscles", MUSCLES_KEY)

    async def list_equipment(self) -> list[str]:
        return await self._get_names("/equipments", EQUIPMENTS_KEY)

    async def list_body_parts(self) -> list[str]:
        return await self._get_names("/bodyparts", BODY_PARTS_KEY)

    def clear_cache(self) -> None:
        if self._cache is None:
            return
        self._cache.invalidate_prefix("bodypart_")
        self._cache.invalidate_prefix("search_")
        self._cache.invalidate_prefix("exercise_")
        for key in (MUSCLES_KEY, EQUIPMENTS_KEY, BODY_PARTS_KEY):
            self._cache.invalidate(key)
        logger.info("ExerciseDB cache cleared")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _get_names(self, path: str, cache_key: str) -> list[str]:
        if self._cache is not None:
            cached = self._cache.get(cache_key)
            if cached is not None:
                return list(cached)

        body = await self._get(path)
        try:
            names = [item["name"] for item in body["data"]]
        except (KeyError, TypeError) as exc:
            raise DecodingError(detail=str(exc)) from exc

        if self._cache is not None:
            self._cache.set(cache_key, names, self._config.lists_ttl_seconds)
        return names

    async def _get_page(self, path: str, params: dict[str, Any]) -> CatalogPage:
        body = await self._get(path, params)
        try:
            exercises = [_parse_exercise(item) for item in body["data"]]
            metadata = _parse_metadata(body.get("metadata"))
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodingError(detail=str(exc)) from exc
        return CatalogPage(exercises=exercises, metadata=metadata)

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> dict:
        """GET ``path`` and return the decoded JSON body.

        Raises:
            NotFoundError:           404.
            RateLimitedError:        429.
            ServerError:             Any other non-2xx status.
            DecodingError:           Body is not a JSON object.
            CatalogTimeoutError:     Request timed out.
            NetworkUnavailableError: Connection could not be made.
        """
        await self._rate_limiter.wait_and_record()
        url = f"{self._base_url}{path}"
        timeout = self._config.timeout_seconds

        try:
            if self._http_client:
                response = await self._http_client.get(url, params=params, timeout=timeout)
            else:
                async with httpx.AsyncClient(timeout=timeout) as client:
                    response = await client.get(url, params=params)
        except httpx.HTTPError as exc:
            logger.warning("ExerciseDB request to %s failed: %s", path, exc)
            raise CatalogError.from_exception(exc) from exc

        status = response.status_code
        if status == 404:
            raise NotFoundError()
        if status == 429:
            raise RateLimitedError()
        if not 200 <= status < 300:
            logger.warning("ExerciseDB %s returned HTTP %d", path, status)
            raise ServerError(status)

        try:
            body = response.json()
        except ValueError as exc:
            raise DecodingError(detail=str(exc)) from exc
        if not isinstance(body, dict):
            raise DecodingError(detail=f"expected an object, got {type(body).__name__}")
        return body
