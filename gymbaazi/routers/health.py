"""Health check endpoint, public, outside the versioned prefix."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from gymbaazi.dependencies import AppSettings

router = APIRouter(tags=["system"])
logger = logging.getLogger("gymbaazi.health")


@router.get("/health")
def health_check(request: Request, settings: AppSettings) -> dict:
    """Liveness check.  Returns 200 if the API process is up.

    Also checks the record store with a cheap key listing.
    """
    storage_ok = False
    repository = getattr(request.app.state, "repository", None)
    if repository is not None:
        try:
            repository.store.keys()
            storage_ok = True
        except OSError as exc:
            logger.warning("Health check storage listing failed: %s", exc)

    controller = getattr(request.app.state, "controller", None)
    return {
        "status": "healthy" if storage_ok else "degraded",
        "version": settings.app_version,
        "environment": settings.environment,
        "storage": "available" if storage_ok else "unavailable",
        "session": controller.status.value if controller is not None else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
