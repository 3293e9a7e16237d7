"""
Codeloom Backend - FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() assembles middleware, exception handlers and routers.
Who:   uvicorn (`uvicorn codeloom.main:app`) and the test client.

Application Architecture:
    ┌───────────────────────────────────────────────────────┐
    │                     FastAPI App                       │
    │                                                       │
    │  Middleware Chain:                                    │
    │  ┌──────────┐ ┌──────────┐ ┌─────────┐ ┌───────────┐ │
    │  │ Metrics  │→│ Req ID   │→│ Logging │→│ GZip/CORS │ │
    │  └──────────┘ └──────────┘ └─────────┘ └───────────┘ │
    │                                                       │
    │  Routes:                                              │
    │  ┌──────┐ ┌────────────────┐ ┌─────────────┐ ┌──────┐ │
    │  │ GET /│ │ /api/practices │ │ /api/system │ │health│ │
    │  └──────┘ └────────────────┘ └─────────────┘ └──────┘ │
    │                                                       │
    │  Exception Handlers:                                  │
    │  ValidationError→400 │ NotFound→404 │ Database→500    │
    └───────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, validate configuration, log readiness
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from codeloom import __version__
from codeloom.config import settings
from codeloom.database import dispose_engine
from codeloom.exceptions import (
    CodeloomError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from codeloom.middleware.logging import RequestLoggingMiddleware
from codeloom.middleware.metrics import MetricsMiddleware
from codeloom.middleware.request_id import (
    RequestIDMiddleware,
    internal_error_response,
    request_id_var,
)
from codeloom.routes import health, pages, practices, system
from codeloom.utils.phi import PHIScrubbingFilter

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure application-wide logging.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s

    Every root handler gets a PHIScrubbingFilter so structured log
    arguments never carry patient data, whichever module logs them.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    phi_filter = PHIScrubbingFilter()
    for handler in logging.getLogger().handlers:
        handler.addFilter(phi_filter)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("Codeloom Backend %s starting (environment=%s, app_env=%s)",
                __version__, settings.environment, settings.app_env)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Keep serving so health probes can report the problem
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Codeloom Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

        ValidationError   → 400 Bad Request
        NotFoundError     → 404 Not Found
        DatabaseError     → 500 (generic message, context logged)
        CodeloomError     → 500 (catch-all for application errors)
        Exception         → 500 (unexpected; stack trace logged only)
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(CodeloomError)
    async def handle_application_error(request: Request, exc: CodeloomError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    # Last resort for errors raised outside RequestIDMiddleware. Errors from
    # the routes are answered there, where the request id is still known.
    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return internal_error_response(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Middleware executes in reverse order of addition, so the last one added
    (Metrics) sees every request first.
    """
    app = FastAPI(
        title="Codeloom API",
        description="Practice management backend and server-rendered pages for Codeloom.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Development accepts any origin; other environments use the allow-list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_origin_regex=".*" if settings.is_development else None,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(MetricsMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(practices.router)
    app.include_router(system.router)
    app.include_router(health.router)

    return app


app = create_app()
