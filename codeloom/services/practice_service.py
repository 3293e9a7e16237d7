"""
Codeloom Backend - Practice Service
====================================

What:  Business logic for practices: lookup, onboarding and plan changes.
How:   Stateless service; every method receives the request's AsyncSession.
Who:   Called by routes/practices.py.

Two lookup methods exist on purpose:

    get_practice_by_id()  the data accessor. One unique-find by primary key,
                          returns the Practice or None. It does not validate
                          the id, translate errors or cache anything: ORM
                          exceptions reach the caller unchanged.

    get_practice()        the route-facing method. Converts None into
                          NotFoundError and wraps driver failures in
                          DatabaseError.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codeloom.exceptions import CodeloomError, DatabaseError, NotFoundError, ValidationError
from codeloom.models.practice import Practice
from codeloom.plans import DEFAULT_PLAN_KEY, get_plan, is_valid_plan_key, plan_keys
from codeloom.schemas.practice import (
    PlanResponse,
    PracticePlanUpdateResponse,
    PracticeResponse,
)
from codeloom.services.practice_config_service import practice_config_service

logger = logging.getLogger(__name__)


def _to_response(practice: Practice) -> PracticeResponse:
    return PracticeResponse(
        id=practice.id,
        name=practice.name,
        plan_key=practice.plan_key,
        created_at=practice.created_at,
    )


class PracticeService:
    """
    Business logic layer for practice operations.

    Error Handling Strategy:
        Application exceptions (NotFoundError, ValidationError) propagate as-is.
        Anything else raised while talking to the database is logged and
        re-raised as DatabaseError so driver details never reach the client.
    """

    async def get_practice_by_id(
        self, db: AsyncSession, practice_id: str
    ) -> Optional[Practice]:
        """
        Fetch a practice by identifier.

        Returns:
            The matching Practice, or None for an unknown id.
        """
        result = await db.execute(select(Practice).where(Practice.id == practice_id))
        return result.scalar_one_or_none()

    async def get_practice(self, db: AsyncSession, practice_id: str) -> PracticeResponse:
        """
        Retrieve a single practice for the API.

        Raises:
            NotFoundError: No practice with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        practice = await self._require_practice(db, practice_id)
        return _to_response(practice)

    async def create_practice(self, db: AsyncSession, name: str) -> PracticeResponse:
        """
        Onboard a new practice.

        Workflow:
            1. Reject blank names
            2. Insert the practice on the default plan
            3. Create its default configuration row

        Raises:
            ValidationError: Blank name (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        cleaned = (name or "").strip()
        if not cleaned:
            raise ValidationError(message="Practice name must not be blank", field="name")

        now = datetime.now(timezone.utc)
        practice = Practice(
            id=str(uuid.uuid4()),
            name=cleaned,
            plan_key=DEFAULT_PLAN_KEY,
            plan_since=now,
            created_at=now,
        )

        try:
            db.add(practice)
            await db.flush()
            await practice_config_service.initialize_configuration(db, practice.id)
        except CodeloomError:
            raise
        except Exception as e:
            logger.error("Database error creating practice: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not create the practice. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Practice created: %s (plan=%s)", practice.id, practice.plan_key)
        return _to_response(practice)

    async def get_practice_plan(self, db: AsyncSession, practice_id: str) -> PlanResponse:
        """
        Return the entitlements of the practice's plan.

        A stored plan key that is not in the catalog resolves to plan_a.
        """
        practice = await self._require_practice(db, practice_id)
        plan = get_plan(practice.plan_key)
        return PlanResponse(
            plan_key=plan.key,
            plan_name=plan.name,
            max_providers=plan.max_providers,
            max_encounters_per_month=plan.max_encounters_per_month,
            training_enabled=plan.training_enabled,
            analytics_enabled=plan.analytics_enabled,
            exports_enabled=plan.exports_enabled,
        )

    async def set_practice_plan(
        self, db: AsyncSession, practice_id: str, plan_key: Optional[str]
    ) -> PracticePlanUpdateResponse:
        """
        Move a practice to another plan and stamp plan_since.

        Raises:
            ValidationError: plan_key missing or not in the catalog (→ 400)
            NotFoundError: No practice with this id (→ 404)
        """
        if not is_valid_plan_key(plan_key):
            raise ValidationError(
                message=f"Invalid plan_key. Must be one of: {', '.join(plan_keys())}",
                field="plan_key",
            )

        practice = await self._require_practice(db, practice_id)
        practice.plan_key = plan_key
        practice.plan_since = datetime.now(timezone.utc)

        try:
            await db.flush()
        except Exception as e:
            logger.error("Database error updating plan for %s: %s", practice_id, str(e))
            raise DatabaseError(
                message="Could not update the practice plan. Please try again.",
                context={"practice_id": practice_id},
            )

        logger.info("Practice %s moved to plan %s", practice.id, plan_key)
        return PracticePlanUpdateResponse(
            id=practice.id,
            plan_key=practice.plan_key,
            plan_since=practice.plan_since,
        )

    async def _require_practice(self, db: AsyncSession, practice_id: str) -> Practice:
        try:
            practice = await self.get_practice_by_id(db, practice_id)
        except Exception as e:
            logger.error("Database error fetching practice %s: %s", practice_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the practice. Please try again.",
                context={"practice_id": practice_id},
            )
        if practice is None:
            raise NotFoundError(resource="practice", resource_id=practice_id)
        return practice


# ── Singleton Instance ────────────────────────────────────────────────────
practice_service = PracticeService()
