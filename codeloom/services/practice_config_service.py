"""
Codeloom Backend - Practice Configuration Service
==================================================

What:  Read, update and initialize a practice's feature configuration.
Who:   Called by routes/practices.py and by practice onboarding.

Defaults:
    A practice without a configuration row reads as
        llm_mode='mock', enabled_specialties=[], provider_can_edit_codes=False
    while a freshly onboarded practice is initialized with
        llm_mode=<settings.default_llm_mode>, enabled_specialties=['primary_care'].

Storage:
    enabled_specialties is kept as a JSON text array so the column stays
    portable between PostgreSQL and SQLite.
"""

import json
import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from codeloom.config import VALID_LLM_MODES, settings
from codeloom.exceptions import CodeloomError, DatabaseError, NotFoundError, ValidationError
from codeloom.models.practice import Practice, PracticeConfiguration
from codeloom.schemas.practice import PracticeConfigResponse, PracticeConfigUpdateRequest

logger = logging.getLogger(__name__)

DEFAULT_LLM_MODE = "mock"
ONBOARDING_SPECIALTIES = ["primary_care"]


def _decode_specialties(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except ValueError:
        logger.warning("Unreadable enabled_specialties_json; treating as empty")
        return []
    if not isinstance(value, list):
        return []
    return [str(item) for item in value]


def _to_response(config: PracticeConfiguration) -> PracticeConfigResponse:
    return PracticeConfigResponse(
        llm_mode=config.llm_mode,
        enabled_specialties=_decode_specialties(config.enabled_specialties_json),
        provider_can_edit_codes=config.provider_can_edit_codes,
    )


class PracticeConfigService:
    """Stateless service over the practice_configurations table."""

    async def get_configuration(
        self, db: AsyncSession, practice_id: str
    ) -> PracticeConfigResponse:
        """Returns the stored configuration, or the defaults when none exists."""
        config = await self._find(db, practice_id)
        if config is None:
            return PracticeConfigResponse(
                llm_mode=DEFAULT_LLM_MODE,
                enabled_specialties=[],
                provider_can_edit_codes=False,
            )
        return _to_response(config)

    async def update_configuration(
        self,
        db: AsyncSession,
        practice_id: str,
        updates: PracticeConfigUpdateRequest,
    ) -> PracticeConfigResponse:
        """
        Apply a partial update, creating the row if the practice has none.

        Raises:
            ValidationError: llm_mode not one of mock, openai, anthropic (→ 400)
            NotFoundError: No practice with this id (→ 404)
            DatabaseError: Write failed (→ 500)
        """
        if updates.llm_mode is not None and updates.llm_mode not in VALID_LLM_MODES:
            raise ValidationError(
                message="Invalid llm_mode. Must be one of: mock, openai, anthropic",
                field="llm_mode",
            )

        try:
            exists = await db.execute(select(Practice.id).where(Practice.id == practice_id))
            if exists.scalar_one_or_none() is None:
                raise NotFoundError(resource="practice", resource_id=practice_id)

            config = await self._find(db, practice_id)
            if config is None:
                config = PracticeConfiguration(
                    practice_id=practice_id,
                    llm_mode=updates.llm_mode or DEFAULT_LLM_MODE,
                    enabled_specialties_json=json.dumps(updates.enabled_specialties or []),
                    provider_can_edit_codes=bool(updates.provider_can_edit_codes),
                )
                db.add(config)
            else:
                if updates.llm_mode is not None:
                    config.llm_mode = updates.llm_mode
                if updates.enabled_specialties is not None:
                    config.enabled_specialties_json = json.dumps(updates.enabled_specialties)
                if updates.provider_can_edit_codes is not None:
                    config.provider_can_edit_codes = updates.provider_can_edit_codes

            await db.flush()
        except CodeloomError:
            raise
        except Exception as e:
            logger.error("Database error updating config for %s: %s", practice_id, str(e))
            raise DatabaseError(
                message="Could not update the practice configuration. Please try again.",
                context={"practice_id": practice_id},
            )

        logger.info("Configuration updated for practice %s", practice_id)
        return _to_response(config)

    async def initialize_configuration(self, db: AsyncSession, practice_id: str) -> None:
        """Creates the onboarding defaults unless a row already exists."""
        if await self._find(db, practice_id) is not None:
            return
        db.add(
            PracticeConfiguration(
                practice_id=practice_id,
                llm_mode=settings.default_llm_mode,
                enabled_specialties_json=json.dumps(ONBOARDING_SPECIALTIES),
                provider_can_edit_codes=False,
            )
        )
        await db.flush()

    async def _find(
        self, db: AsyncSession, practice_id: str
    ) -> Optional[PracticeConfiguration]:
        result = await db.execute(
            select(PracticeConfiguration).where(PracticeConfiguration.practice_id == practice_id)
        )
        return result.scalar_one_or_none()


# ── Singleton Instance ────────────────────────────────────────────────────
practice_config_service = PracticeConfigService()
