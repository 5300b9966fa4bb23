"""Tests for the ExerciseDB client against a mocked transport."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from gymbaazi.catalog import CATALOG_REGISTRY, ExerciseDBClient, get_catalog
from gymbaazi.catalog.errors import (
    CatalogTimeoutError,
    DecodingError,
    NetworkUnavailableError,
    NotFoundError,
    RateLimitedError,
    ServerError,
)
from gymbaazi.catalog.rate_limiter import SlidingWindowRateLimiter
from gymbaazi.catalog.tests.conftest import exercise_payload


def _names_payload(*names: str) -> dict:
    return {"success": True, "data": [{"name": n} for n in names]}


# ---------------------------------------------------------------------------
# Paging and parsing
# ---------------------------------------------------------------------------


class TestExercisePages:
    @pytest.mark.asyncio
    async def test_list_parses_exercises(self, client: ExerciseDBClient, handler) -> None:
        page = await client.list_exercises()
        assert [e.exercise_id for e in page.exercises] == ["0000", "0001"]
        first = page.exercises[0]
        assert first.target_muscles == ["pectorals"]
        assert first.primary_equipment == "barbell"
        assert page.metadata.total_exercises == 120
        assert page.metadata.total_pages == 5
        assert handler.requests[0].url.path == "/api/v1/exercises"

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, client: ExerciseDBClient, handler) -> None:
        await client.list_exercises(offset=50, limit=500, search="press")
        params = handler.requests[0].url.params
        assert params["limit"] == "25"
        assert params["offset"] == "50"
        assert params["search"] == "press"
        assert params["sortBy"] == "targetMuscles"

    @pytest.mark.asyncio
    async def test_search(self, client: ExerciseDBClient, handler) -> None:
        await client.search_exercises("curl", threshold=0.5)
        request = handler.requests[0]
        assert request.url.path == "/api/v1/exercises/search"
        assert request.url.params["q"] == "curl"
        assert request.url.params["threshold"] == "0.5"

    @pytest.mark.asyncio
    async def test_filter_joins_lists(self, client: ExerciseDBClient, handler) -> None:
        await client.filter_exercises(muscles=["biceps", "forearms"], equipment=["dumbbell"])
        params = handler.requests[0].url.params
        assert params["muscles"] == "biceps,forearms"
        assert params["equipment"] == "dumbbell"
        assert "bodyParts" not in params

    @pytest.mark.asyncio
    async def test_by_muscle(self, client: ExerciseDBClient, handler) -> None:
        await client.exercises_by_muscle("biceps", include_secondary=True)
        request = handler.requests[0]
        assert request.url.path == "/api/v1/muscles/biceps/exercises"
        assert request.url.params["includeSecondary"] == "true"

    @pytest.mark.asyncio
    async def test_by_equipment(self, client: ExerciseDBClient, handler) -> None:
        await client.exercises_by_equipment("kettlebell")
        assert handler.requests[0].url.path == "/api/v1/equipments/kettlebell/exercises"

    @pytest.mark.asyncio
    async def test_page_without_metadata(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(200, json={"success": True, "data": []})
        page = await client.list_exercises()
        assert page.exercises == []
        assert page.metadata is None


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


class TestCaching:
    @pytest.mark.asyncio
    async def test_exercise_detail_is_cached(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(
            200, json={"success": True, "data": exercise_payload("0042", "hammer curl")}
        )
        first = await client.get_exercise("0042")
        second = await client.get_exercise("0042")
        assert first == second
        assert first.name == "hammer curl"
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_body_part_first_page_is_cached(self, client: ExerciseDBClient, handler) -> None:
        first = await client.exercises_by_body_part("Chest")
        cached = await client.exercises_by_body_part("chest")
        assert len(handler.requests) == 1
        assert [e.exercise_id for e in cached.exercises] == [e.exercise_id for e in first.exercises]
        assert cached.metadata.total_exercises == 120

    @pytest.mark.asyncio
    async def test_body_part_small_pages_bypass_cache(self, client: ExerciseDBClient, handler) -> None:
        await client.exercises_by_body_part("back", limit=1)
        await client.exercises_by_body_part("back", limit=1)
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_body_part_cache_can_be_skipped(self, client: ExerciseDBClient, handler) -> None:
        await client.exercises_by_body_part("back")
        await client.exercises_by_body_part("back", use_cache=False)
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_taxonomy_lists_expire(self, client: ExerciseDBClient, handler, fake_time) -> None:
        handler.responder = lambda r: httpx.Response(200, json=_names_payload("biceps", "calves"))
        assert await client.list_muscles() == ["biceps", "calves"]
        assert await client.list_muscles() == ["biceps", "calves"]
        assert len(handler.requests) == 1

        fake_time.advance(86400)
        await client.list_muscles()
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_clear_cache(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(200, json=_names_payload("barbell"))
        await client.list_equipment()
        client.clear_cache()
        await client.list_equipment()
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_without_cache(self, catalog_config, http_client, handler) -> None:
        uncached = ExerciseDBClient(config=catalog_config, http_client=http_client)
        handler.responder = lambda r: httpx.Response(200, json=_names_payload("waist"))
        await uncached.list_body_parts()
        await uncached.list_body_parts()
        uncached.clear_cache()
        assert len(handler.requests) == 2


# ---------------------------------------------------------------------------
# Error mapping
# ---------------------------------------------------------------------------


class TestErrors:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status, error_cls",
        [(404, NotFoundError), (429, RateLimitedError), (500, ServerError), (503, ServerError)],
    )
    async def test_status_mapping(self, client: ExerciseDBClient, handler, status, error_cls) -> None:
        handler.responder = lambda r: httpx.Response(status, json={"success": False})
        with pytest.raises(error_cls):
            await client.get_exercise("nope")

    @pytest.mark.asyncio
    async def test_server_error_keeps_status(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(502, text="bad gateway")
        with pytest.raises(ServerError) as exc_info:
            await client.list_exercises()
        assert exc_info.value.status_code == 502
        assert exc_info.value.is_retryable

    @pytest.mark.asyncio
    async def test_non_json_body(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(200, text="<html>maintenance</html>")
        with pytest.raises(DecodingError):
            await client.list_exercises()

    @pytest.mark.asyncio
    async def test_non_object_body(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(200, json=[1, 2, 3])
        with pytest.raises(DecodingError):
            await client.list_muscles()

    @pytest.mark.asyncio
    async def test_malformed_exercise(self, client: ExerciseDBClient, handler) -> None:
        handler.responder = lambda r: httpx.Response(200, json={"data": [{"name": "no id"}]})
        with pytest.raises(DecodingError):
            await client.list_exercises()

    @pytest.mark.asyncio
    async def test_timeout(self, client: ExerciseDBClient, handler) -> None:
        def slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        handler.responder = slow
        with pytest.raises(CatalogTimeoutError):
            await client.list_exercises()

    @pytest.mark.asyncio
    async def test_connection_failure(self, client: ExerciseDBClient, handler) -> None:
        def offline(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("no route to host", request=request)

        handler.responder = offline
        with pytest.raises(NetworkUnavailableError):
            await client.list_exercises()


# ---------------------------------------------------------------------------
# Injected client (mocked)
# ---------------------------------------------------------------------------


class TestInjectedClient:
    @pytest.mark.asyncio
    async def test_uses_injected_client(self, catalog_config) -> None:
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.json = MagicMock(return_value={"data": [{"name": "biceps"}]})

        mock_client = MagicMock()
        mock_client.get = AsyncMock(return_value=mock_response)

        client = ExerciseDBClient(config=catalog_config, http_client=mock_client)
        assert await client.list_muscles() == ["biceps"]
        mock_client.get.assert_called_once()
        assert mock_client.get.call_args.kwargs["timeout"] == 5.0


class TestRateLimiting:
    @pytest.mark.asyncio
    async def test_each_request_claims_a_slot(self, catalog_config, http_client, fake_time) -> None:
        limiter = SlidingWindowRateLimiter(10, 60, clock=fake_time)
        limited = ExerciseDBClient(config=catalog_config, rate_limiter=limiter, http_client=http_client)
        await limited.list_exercises()
        await limited.search_exercises("row")
        assert limiter.remaining == 8


class TestRegistry:
    def test_exercisedb_registered(self) -> None:
        assert get_catalog("exercisedb") is ExerciseDBClient
        assert CATALOG_REGISTRY["exercisedb"].SOURCE_ID == "exercisedb"

    def test_unknown_source(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_catalog("wger")
