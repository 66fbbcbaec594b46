"""Health Probes — liveness and database-backed readiness.

Invariants:
    - GET /api/v1/health/ answers 200 while the process can serve requests
    - GET /api/v1/health/ready answers 503 until the database answers SELECT 1
"""

import logging
import time

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from catalog.config import get_settings
from catalog.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])

_STARTED = time.monotonic()


async def _probe_database() -> tuple[bool, float]:
    manager = database.db_manager
    if manager is None:
        return False, 0.0
    started = time.perf_counter()
    ok = await manager.health_check()
    return ok, round((time.perf_counter() - started) * 1000, 2)


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    settings = get_settings()
    return {
        "status": "healthy",
        "service": settings.service_name,
        "version": settings.service_version,
        "uptime_seconds": int(time.monotonic() - _STARTED),
    }


@router.get("/ready")
async def readiness():
    db_ok, latency_ms = await _probe_database()
    if not db_ok:
        logger.warning("Readiness probe failed", extra={"operation": "ready"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy", "database_latency_ms": latency_ms},
    }
