"""
Codeloom Backend - Practice Configuration Service Tests
========================================================

What we test:
    ✅ Missing configuration reads as the defaults
    ✅ Stored specialties are decoded, unreadable JSON reads as empty
    ✅ llm_mode is validated before any query runs
    ✅ Partial updates only touch the fields provided
    ✅ Onboarding initialization is idempotent
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from codeloom.exceptions import DatabaseError, NotFoundError, ValidationError
from codeloom.models.practice import PracticeConfiguration
from codeloom.schemas.practice import PracticeConfigUpdateRequest
from codeloom.services.practice_config_service import PracticeConfigService


def _result(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _config(**overrides):
    values = {
        "practice_id": "p-1",
        "llm_mode": "openai",
        "enabled_specialties_json": '["primary_care", "cardiology"]',
        "provider_can_edit_codes": True,
    }
    values.update(overrides)
    return PracticeConfiguration(**values)


class TestGetConfiguration:

    def setup_method(self):
        self.service = PracticeConfigService()

    @pytest.mark.asyncio
    async def test_defaults_when_missing(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)

        config = await self.service.get_configuration(mock_db_session, "p-1")

        assert config.llm_mode == "mock"
        assert config.enabled_specialties == []
        assert config.provider_can_edit_codes is False

    @pytest.mark.asyncio
    async def test_stored_values(self, mock_db_session):
        mock_db_session.execute.return_value = _result(_config())

        config = await self.service.get_configuration(mock_db_session, "p-1")

        assert config.llm_mode == "openai"
        assert config.enabled_specialties == ["primary_care", "cardiology"]
        assert config.provider_can_edit_codes is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["not json", '{"a": 1}', ""])
    async def test_unreadable_specialties_read_as_empty(self, mock_db_session, raw):
        mock_db_session.execute.return_value = _result(_config(enabled_specialties_json=raw))

        config = await self.service.get_configuration(mock_db_session, "p-1")

        assert config.enabled_specialties == []


class TestUpdateConfiguration:

    def setup_method(self):
        self.service = PracticeConfigService()

    @pytest.mark.asyncio
    async def test_invalid_llm_mode(self, mock_db_session):
        updates = PracticeConfigUpdateRequest(llm_mode="gpt-local")

        with pytest.raises(ValidationError) as exc_info:
            await self.service.update_configuration(mock_db_session, "p-1", updates)

        assert exc_info.value.message == "Invalid llm_mode. Must be one of: mock, openai, anthropic"
        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_practice(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)

        with pytest.raises(NotFoundError):
            await self.service.update_configuration(
                mock_db_session, "missing", PracticeConfigUpdateRequest(llm_mode="openai")
            )

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, mock_db_session):
        stored = _config()
        mock_db_session.execute = AsyncMock(side_effect=[_result("p-1"), _result(stored)])

        config = await self.service.update_configuration(
            mock_db_session, "p-1", PracticeConfigUpdateRequest(provider_can_edit_codes=False)
        )

        assert config.provider_can_edit_codes is False
        assert config.llm_mode == "openai"
        assert config.enabled_specialties == ["primary_care", "cardiology"]
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_creates_row_when_missing(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=[_result("p-1"), _result(None)])

        config = await self.service.update_configuration(
            mock_db_session,
            "p-1",
            PracticeConfigUpdateRequest(llm_mode="anthropic", enabled_specialties=["dermatology"]),
        )

        assert config.llm_mode == "anthropic"
        assert config.enabled_specialties == ["dermatology"]
        assert config.provider_can_edit_codes is False
        added = mock_db_session.add.call_args[0][0]
        assert isinstance(added, PracticeConfiguration)
        assert added.practice_id == "p-1"

    @pytest.mark.asyncio
    async def test_flush_failure_becomes_database_error(self, mock_db_session):
        mock_db_session.execute = AsyncMock(side_effect=[_result("p-1"), _result(_config())])
        mock_db_session.flush = AsyncMock(side_effect=RuntimeError("disk full"))

        with pytest.raises(DatabaseError):
            await self.service.update_configuration(
                mock_db_session, "p-1", PracticeConfigUpdateRequest(llm_mode="mock")
            )


class TestInitializeConfiguration:

    def setup_method(self):
        self.service = PracticeConfigService()

    @pytest.mark.asyncio
    async def test_creates_onboarding_defaults(self, mock_db_session):
        mock_db_session.execute.return_value = _result(None)

        await self.service.initialize_configuration(mock_db_session, "p-1")

        added = mock_db_session.add.call_args[0][0]
        assert added.llm_mode == "mock"
        assert added.enabled_specialties_json == '["primary_care"]'
        assert added.provider_can_edit_codes is False

    @pytest.mark.asyncio
    async def test_existing_row_is_left_alone(self, mock_db_session):
        mock_db_session.execute.return_value = _result(_config())

        await self.service.initialize_configuration(mock_db_session, "p-1")

        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_idempotent_against_database(self, db_session, sample_practice):
        await self.service.initialize_configuration(db_session, sample_practice.id)
        await self.service.initialize_configuration(db_session, sample_practice.id)
        await db_session.commit()

        config = await self.service.get_configuration(db_session, sample_practice.id)
        assert config.enabled_specialties == ["primary_care"]
