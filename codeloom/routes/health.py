"""
Codeloom Backend - Health Check Route
======================================

What:  Aggregate health endpoint for Docker health checks and load balancers.
Why:   A load balancer must stop routing to an instance that cannot reach
       its database; the 503 is what tells it to.
How:   Runs SELECT 1 against the database and reports uptime and version.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text

from codeloom import __version__, database
from codeloom.config import settings
from codeloom.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Why module-level: set once at import, which is process start for uvicorn
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    # Why SELECT 1: proves connection and query execution without touching
    # any table; probes run every few seconds
    # Why database.engine (not an imported name): looked up per call, so a
    # replaced engine is picked up
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        response.status_code = 503
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        environment=settings.environment,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
