"""
Codeloom Backend - Practice Request/Response Schemas
=====================================================

What:  Pydantic models defining the practice API contract.
How:   FastAPI validates request bodies against these models, serializes
       responses with them, and generates OpenAPI docs from them.
Who:   Used by routes/practices.py and the practice services.

Schemas are separate from the SQLAlchemy models so the API exposes exactly
the fields listed here and nothing else from the tables.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Practice
# ══════════════════════════════════════════════════════════════════════════


class PracticeCreateRequest(BaseModel):
    """Body of POST /api/practices."""
    name: str = Field(min_length=1, max_length=255, description="Practice display name")


class PracticeResponse(BaseModel):
    """
    Public representation of a practice.

    Returned by GET /api/practices/{id} and POST /api/practices.
    """
    id: str = Field(description="Practice identifier")
    name: str = Field(description="Practice display name")
    plan_key: str = Field(description="Current subscription plan key")
    created_at: datetime = Field(description="When the practice was created (UTC ISO 8601)")

    model_config = {"from_attributes": True}


# ══════════════════════════════════════════════════════════════════════════
# Plan
# ══════════════════════════════════════════════════════════════════════════


class PlanResponse(BaseModel):
    """Entitlements of the plan a practice is on."""
    plan_key: str
    plan_name: str
    max_providers: int
    max_encounters_per_month: int
    training_enabled: bool
    analytics_enabled: bool
    exports_enabled: bool


class PlanUpdateRequest(BaseModel):
    """
    Body of POST /api/practices/{id}/plan.

    plan_key is checked against the catalog in the service layer so the
    error message can list the valid keys.
    """
    plan_key: Optional[str] = Field(default=None, description="One of plan_a, plan_b, plan_c")


class PracticePlanUpdateResponse(BaseModel):
    id: str
    plan_key: str
    plan_since: datetime


# ══════════════════════════════════════════════════════════════════════════
# Configuration
# ══════════════════════════════════════════════════════════════════════════


class PracticeConfigResponse(BaseModel):
    """Feature configuration of a practice (defaults when none is stored)."""
    llm_mode: str = Field(description="Suggestion mode: mock, openai or anthropic")
    enabled_specialties: List[str] = Field(description="Enabled specialty keys")
    provider_can_edit_codes: bool = Field(description="Whether providers may edit codes")


class PracticeConfigUpdateRequest(BaseModel):
    """
    Body of PATCH /api/practices/{id}/config.

    Every field is optional; only fields that are present are updated.
    """
    llm_mode: Optional[str] = None
    enabled_specialties: Optional[List[str]] = None
    provider_can_edit_codes: Optional[bool] = None
