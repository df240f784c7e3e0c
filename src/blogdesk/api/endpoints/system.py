# src/blogdesk/api/endpoints/system.py
"""Liveness and service information endpoints."""

from __future__ import annotations

import time

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from blogdesk.core.settings import settings
from blogdesk.db.time import utcnow

router = APIRouter(tags=["system"])

PROCESS_STARTED_AT = time.monotonic()


def uptime_seconds() -> float:
    """Seconds since this module was first imported."""
    return round(time.monotonic() - PROCESS_STARTED_AT, 3)


@router.get("/health")
def health_check(request: Request) -> JSONResponse:
    """Report uptime and database reachability.

    Returns:
        200 when the database answers, 503 otherwise
    """
    database = getattr(request.app.state, "database", None)
    connected = database is not None and database.ping()
    body = {
        "status": "ok" if connected else "unavailable",
        "timestamp": utcnow().isoformat(),
        "uptime": uptime_seconds(),
        "environment": settings.environment,
        "database": "connected" if connected else "disconnected",
    }
    return JSONResponse(
        status_code=status.HTTP_200_OK if connected else status.HTTP_503_SERVICE_UNAVAILABLE,
        content=body,
    )


@router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }
