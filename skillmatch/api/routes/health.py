"""Liveness and service info endpoints."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from skillmatch.api.deps import get_settings
from skillmatch.config import Settings
from skillmatch.db.session import Database, get_database

router = APIRouter()

_started = time.monotonic()


@router.get("/")
async def root(settings: Settings = Depends(get_settings)):
    """Root endpoint."""
    return {
        "success": True,
        "message": f"{settings.APP_NAME} is running!",
        "version": settings.APP_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health")
async def health_check(database: Database = Depends(get_database)):
    """Health check endpoint; always 200, reports store reachability."""
    database_ok = await database.ping()
    return {
        "success": True,
        "message": "OK",
        "status": "healthy" if database_ok else "degraded",
        "database": "connected" if database_ok else "unreachable",
        "uptime": round(time.monotonic() - _started, 3),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
