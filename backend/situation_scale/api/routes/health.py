"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if database is unreachable (readiness)
    - Readiness also reports how many rooms currently hold live sockets

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - database module read at call time: db_manager is assigned by the lifespan
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from situation_scale.api.dependencies import get_broadcaster
from situation_scale.infrastructure import database
from situation_scale.infrastructure.room_broadcast import RoomBroadcaster

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "situation-scale",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(
    broadcaster: RoomBroadcaster = Depends(get_broadcaster),
):
    """Readiness probe — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        logger.warning("Readiness check failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "activeRooms": len(broadcaster.room_codes()),
    }
