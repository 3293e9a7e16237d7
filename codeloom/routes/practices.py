"""
Codeloom Backend - Practice Route Handlers
===========================================

What:  HTTP surface for practices, their plan and their configuration.
How:   Each handler delegates to practice_service or practice_config_service;
       application exceptions are turned into JSON errors by the global
       handlers in main.py.
"""

import logging

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from codeloom.database import get_db_session
from codeloom.schemas.common import ErrorResponse
from codeloom.schemas.practice import (
    PlanResponse,
    PlanUpdateRequest,
    PracticeConfigResponse,
    PracticeConfigUpdateRequest,
    PracticeCreateRequest,
    PracticePlanUpdateResponse,
    PracticeResponse,
)
from codeloom.services.practice_config_service import practice_config_service
from codeloom.services.practice_service import practice_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/practices", tags=["Practices"])


@router.post(
    "",
    status_code=201,
    response_model=PracticeResponse,
    responses={
        201: {"description": "Practice created", "model": PracticeResponse},
        400: {"description": "Invalid practice name", "model": ErrorResponse},
    },
    summary="Onboard a new practice",
)
async def create_practice(
    payload: PracticeCreateRequest,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PracticeResponse:
    """Creates the practice on the default plan with default configuration."""
    result = await practice_service.create_practice(db=db, name=payload.name)
    # Why Location: clients can follow the new resource without building URLs
    response.headers["Location"] = f"/api/practices/{result.id}"
    return result


@router.get(
    "/{practice_id}",
    response_model=PracticeResponse,
    responses={
        200: {"description": "Practice details", "model": PracticeResponse},
        404: {"description": "Practice not found", "model": ErrorResponse},
    },
    summary="Get a practice by ID",
)
async def get_practice(
    practice_id: str,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> PracticeResponse:
    result = await practice_service.get_practice(db=db, practice_id=practice_id)
    # Why private, no-cache: tenant data must never sit in a shared cache, and
    # a plan change has to show up on the next read
    response.headers["Cache-Control"] = "private, no-cache"
    return result


@router.get(
    "/{practice_id}/plan",
    response_model=PlanResponse,
    responses={404: {"description": "Practice not found", "model": ErrorResponse}},
    summary="Get the practice's plan entitlements",
)
async def get_practice_plan(
    practice_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PlanResponse:
    return await practice_service.get_practice_plan(db=db, practice_id=practice_id)


@router.post(
    "/{practice_id}/plan",
    response_model=PracticePlanUpdateResponse,
    responses={
        400: {"description": "Unknown plan key", "model": ErrorResponse},
        404: {"description": "Practice not found", "model": ErrorResponse},
    },
    summary="Move the practice to another plan",
)
async def set_practice_plan(
    practice_id: str,
    payload: PlanUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PracticePlanUpdateResponse:
    return await practice_service.set_practice_plan(
        db=db, practice_id=practice_id, plan_key=payload.plan_key
    )


@router.get(
    "/{practice_id}/config",
    response_model=PracticeConfigResponse,
    summary="Get the practice configuration",
    description="Returns defaults when the practice has no stored configuration.",
)
async def get_practice_config(
    practice_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> PracticeConfigResponse:
    return await practice_config_service.get_configuration(db=db, practice_id=practice_id)


@router.patch(
    "/{practice_id}/config",
    response_model=PracticeConfigResponse,
    responses={
        400: {"description": "Invalid llm_mode", "model": ErrorResponse},
        404: {"description": "Practice not found", "model": ErrorResponse},
    },
    summary="Update the practice configuration",
)
async def update_practice_config(
    practice_id: str,
    payload: PracticeConfigUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> PracticeConfigResponse:
    return await practice_config_service.update_configuration(
        db=db, practice_id=practice_id, updates=payload
    )
