"""Health & Readiness Checks — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database or the ACH service is unreachable
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import paygate.infrastructure.database as db_module
from paygate.api.deps import get_ach_client
from paygate.core.errors import AchServiceError
from paygate.infrastructure.ach_client import AchClient

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


def _not_ready(reason: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "not_ready", "reason": reason},
    )


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "paygate-api",
        "version": "0.1.0",
    }


@router.get("/ready")
async def readiness_check(ach: AchClient = Depends(get_ach_client)):
    """Readiness check: database connectivity, then an ACH service ping."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return _not_ready("database_unavailable")
    try:
        await ach.ping()
    except AchServiceError as e:
        logger.warning(f"ACH service ping failed: {e.message}")
        return _not_ready("ach_unavailable")
    return {"status": "ready", "checks": {"database": "healthy", "ach": "healthy"}}
