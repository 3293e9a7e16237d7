"""
Codeloom Backend - Shared Response Schemas
===========================================

What:  Error, health and system response models shared by every router.
"""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "practice with ID 'abc' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Aggregate health returned by GET /health."""
    status: str = Field(description="Overall service status: healthy or unhealthy")
    version: str = Field(description="Backend version")
    environment: str = Field(description="Server environment")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")


class HealthzResponse(BaseModel):
    status: str
    env: str


class ReadyzResponse(BaseModel):
    status: str
    db: str
    env: str


class MetricsResponse(BaseModel):
    total_requests: int
    total_5xx: int
    per_route_5xx: Dict[str, int]


class ClientConfigResponse(BaseModel):
    """Build-time environment surface consumed by the frontend."""
    api_base_url: str
    app_version: str
    app_env: str
    is_dev: bool
    is_pilot: bool
    is_prod: bool
