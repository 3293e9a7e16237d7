"""
Codeloom Backend - Settings Tests
==================================
"""

import pytest
from pydantic import ValidationError

from codeloom.config import Settings


class TestSettings:

    def test_environment_lowercased(self):
        assert Settings(environment="Production").environment == "production"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Settings(environment="qa")

    def test_invalid_app_env(self):
        with pytest.raises(ValidationError):
            Settings(app_env="staging")

    def test_invalid_default_llm_mode(self):
        with pytest.raises(ValidationError):
            Settings(default_llm_mode="local")

    @pytest.mark.parametrize(
        "app_env, flags",
        [("dev", (True, False, False)), ("pilot", (False, True, False)), ("prod", (False, False, True))],
    )
    def test_app_env_flags(self, app_env, flags):
        settings = Settings(app_env=app_env)
        assert (settings.is_dev, settings.is_pilot, settings.is_prod) == flags

    def test_cors_origins_include_frontend_without_duplicates(self):
        settings = Settings(
            cors_origins="http://a.test, http://b.test,,http://a.test",
            frontend_url="http://b.test",
        )
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]

    def test_production_requires_real_database_password(self):
        settings = Settings(
            environment="production",
            app_env="prod",
            database_url="postgresql+asyncpg://codeloom:codeloom_secret@db:5432/codeloom",
        )
        with pytest.raises(ValueError, match="DATABASE_URL"):
            settings.validate_required_for_production()

    def test_production_ok(self):
        settings = Settings(
            environment="production",
            app_env="prod",
            database_url="postgresql+asyncpg://codeloom:s3cret@db:5432/codeloom",
        )
        settings.validate_required_for_production()

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_blank_app_env_means_dev(self, raw):
        settings = Settings(app_env=raw)
        assert settings.app_env == "dev"
        assert settings.is_dev is True
