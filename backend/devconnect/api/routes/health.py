"""Health: liveness and readiness checks.

Invariants:
    - GET /api/health/ answers 200 while the process is up; it touches nothing
    - GET /api/health/ready answers 503 when the database does not round-trip
    - Health checks are public and never resolve a caller
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from devconnect.infrastructure import database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])

SERVICE_NAME = "devconnect-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {"status": "healthy", "service": SERVICE_NAME, "version": SERVICE_VERSION}


@router.get("/ready")
async def readiness():
    """Database connectivity."""
    manager = database.db_manager
    database_ok = bool(manager) and await manager.health_check()
    if not database_ok:
        logger.warning("Readiness check failed", extra={"error_code": "DB_UNAVAILABLE"})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": {"database": "unavailable"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
