"""Health & Readiness Probes: liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health always returns 200 if the process is up (liveness); it never
      touches the database, so it answers while the database is still starting
    - GET /health/ready reads the connection state cell only (no query) and
      returns 503 unless the state is READY

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness gates traffic
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from user_api.infrastructure.database import (
    ConnectionManager, get_connection_manager,
)
from user_api.schemas.user import HealthResponse, ReadinessResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check():
    """Basic liveness probe."""
    return HealthResponse(status="Backend is running!")


@router.get(
    "/ready", response_model=ReadinessResponse,
    responses={503: {"model": ReadinessResponse}},
)
async def readiness_check(
    db: ConnectionManager = Depends(get_connection_manager),
):
    """Readiness probe: reports the connection lifecycle state."""
    if not db.is_ready:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "database": db.state.value},
        )
    return ReadinessResponse(status="ready", database=db.state.value)
