"""GymBaazi API: FastAPI application entry point.

Run locally:
    uvicorn gymbaazi.main:app --reload --port 8000
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncGenerator, Callable

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gymbaazi.catalog import get_catalog
from gymbaazi.catalog.base import ExerciseCatalog
from gymbaazi.catalog.cache import DiskCache
from gymbaazi.catalog.errors import CatalogError, NotFoundError as CatalogNotFoundError, RateLimitedError
from gymbaazi.config import Settings, get_settings
from gymbaazi.routers import exercises, health, history, profile, routines, schedule, session
from gymbaazi.services.storage import JsonFileStore, KeyValueStore
from gymbaazi.workouts.config_loader import get_workout_config
from gymbaazi.workouts.errors import InvalidTransition, NotFoundError, PersistenceError
from gymbaazi.workouts.repository import WorkoutRepository
from gymbaazi.workouts.session import SessionController
from gymbaazi.workouts.ticker import AsyncioTickScheduler, TickScheduler
from gymbaazi.workouts.validation import ValidationError

# ---------- Logging ----------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("gymbaazi")


# ---------- Lifespan ----------

def _open_cache(settings: Settings) -> DiskCache:
    """Open the catalog disk cache, dropping entries that expired while offline."""
    cache = DiskCache(settings.cache_dir)
    removed = cache.cleanup_expired()
    stats = cache.stats()
    logger.info(
        "Catalog cache %s: %d entries (%s), %d expired removed",
        settings.cache_dir,
        stats.file_count,
        stats.formatted_size,
        removed,
    )
    return cache


def _build_catalog(settings: Settings, http_client: httpx.AsyncClient) -> ExerciseCatalog:
    catalog_config = get_workout_config().catalog
    overrides: dict = {"timeout_seconds": settings.http_timeout_seconds}
    if settings.exercisedb_base_url:
        overrides["base_url"] = settings.exercisedb_base_url
    catalog_cls = get_catalog(settings.catalog_source)
    return catalog_cls(
        config=dataclasses.replace(catalog_config, **overrides),
        cache=_open_cache(settings),
        http_client=http_client,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks.

    Builds the repository, the single session controller and the catalog
    client.  Anything already placed on ``app.state`` by ``create_app`` (a
    store, ticker, clock or catalog) is used as-is.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting %s API v%s [%s]",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )

    store: KeyValueStore = app.state.store or JsonFileStore(settings.data_dir)
    repository = WorkoutRepository(store)
    ticker: TickScheduler = app.state.ticker or AsyncioTickScheduler(
        get_workout_config().session.tick_interval_seconds,
        loop=asyncio.get_running_loop(),
    )
    controller = SessionController(repository, ticker=ticker, clock=app.state.clock)
    if settings.recover_on_startup and controller.recover():
        logger.info("Resumed an interrupted session in the paused state")

    http_client: httpx.AsyncClient | None = None
    if app.state.catalog is None:
        http_client = httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        app.state.catalog = _build_catalog(settings, http_client)

    app.state.repository = repository
    app.state.controller = controller
    yield
    controller.shutdown()
    if http_client is not None:
        await http_client.aclose()
        app.state.catalog = None
    logger.info("%s API shut down", settings.app_name)


# ---------- Exception handlers ----------

async def _invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    logger.debug("Rejected transition: %s", exc)
    return JSONResponse(
        status_code=409,
        content={"detail": str(exc), "action": exc.action, "state": exc.state},
    )


async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "field": exc.field})


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def _persistence_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Storage is unavailable, try again"})


async def _catalog_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, CatalogNotFoundError):
        status = 404
    elif isinstance(exc, RateLimitedError):
        status = 429
    else:
        status = 502
    return JSONResponse(status_code=status, content={"detail": exc.message, **exc.to_dict()})


# ---------- App factory ----------

def create_app(
    settings: Settings | None = None,
    *,
    store: KeyValueStore | None = None,
    catalog: ExerciseCatalog | None = None,
    ticker: TickScheduler | None = None,
    clock: Callable[[], datetime] = datetime.now,
) -> FastAPI:
    """Build the API.

    Keyword arguments replace the collaborators the lifespan would otherwise
    build from ``settings`` (used by tests and embedding hosts).
    """
    settings = settings or get_settings()
    logging.getLogger("gymbaazi").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=f"{settings.app_name} API",
        description=(
            "Workout planning and tracking: weekly Push/Pull/Legs schedule, "
            "live session logging with crash recovery, streaks and an exercise catalog."
        ),
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.catalog = catalog
    app.state.ticker = ticker
    app.state.clock = clock
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(InvalidTransition, _invalid_transition_handler)
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(PersistenceError, _persistence_handler)
    app.add_exception_handler(CatalogError, _catalog_handler)

    # ---------- Health check (outside v1 prefix, always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(session.router, prefix=v1_prefix)
    app.include_router(schedule.router, prefix=v1_prefix)
    app.include_router(routines.router, prefix=v1_prefix)
    app.include_router(history.router, prefix=v1_prefix)
    app.include_router(profile.router, prefix=v1_prefix)
    app.include_router(exercises.router, prefix=v1_prefix)

    return app


app = create_app()
