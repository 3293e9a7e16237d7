"""
Codeloom Backend - System Routes
=================================

What:  Liveness, readiness, metrics and build-surface endpoints.

    /api/system/healthz        process is up (never touches the database)
    /api/system/readyz         database answers SELECT 1, else 503
    /api/system/metrics        request counters from MetricsMiddleware
    /api/system/client-config  API base URL, app version and app env for the frontend
    /api/system/theme          Tailwind color tokens for the frontend build
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text

from codeloom import database
from codeloom.config import settings
from codeloom.middleware.metrics import get_metrics
from codeloom.schemas.common import (
    ClientConfigResponse,
    HealthzResponse,
    MetricsResponse,
    ReadyzResponse,
)
from codeloom.ui.theme import tailwind_config

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/system", tags=["System"])


@router.get("/healthz", response_model=HealthzResponse, summary="Liveness probe")
async def healthz() -> HealthzResponse:
    return HealthzResponse(status="ok", env=settings.environment)


@router.get(
    "/readyz",
    response_model=ReadyzResponse,
    responses={503: {"description": "Database unreachable"}},
    summary="Readiness probe",
)
async def readyz():
    # healthz never touches the database so a slow database does not get the
    # process restarted; readiness only takes the instance out of rotation
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.warning("Readiness check: database unreachable: %s", str(e))
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "db": "error", "env": settings.environment},
        )
    return ReadyzResponse(status="ready", db="ok", env=settings.environment)


@router.get("/metrics", response_model=MetricsResponse, summary="In-memory request metrics")
async def read_metrics() -> MetricsResponse:
    return MetricsResponse(**get_metrics())


@router.get(
    "/client-config",
    response_model=ClientConfigResponse,
    summary="Frontend environment surface",
)
async def client_config() -> ClientConfigResponse:
    return ClientConfigResponse(
        api_base_url=settings.api_base_url,
        app_version=settings.app_version,
        app_env=settings.app_env,
        is_dev=settings.is_dev,
        is_pilot=settings.is_pilot,
        is_prod=settings.is_prod,
    )


@router.get("/theme", summary="Tailwind theme tokens")
async def theme() -> Dict[str, Any]:
    # Served from the same table the components use, so the frontend build
    # and the server-rendered pages cannot drift apart
    return tailwind_config()
