"""
Codeloom Backend - Practice SQLAlchemy Models
==============================================

What:  ORM models for the `practices` and `practice_configurations` tables.
How:   Inherit from the shared DeclarativeBase; Alembic reads them for migrations.
Who:   Used by practice_service, practice_config_service and Alembic.

Table Design:
    - Text UUID primary keys: identifiers are opaque strings to every caller,
      so lookups accept any string and simply find nothing for malformed ids.
    - Portable column types (String, Text, Boolean, DateTime(timezone=True))
      so the same models run on PostgreSQL and on SQLite in tests.
    - One configuration row per practice (unique FK, cascade on delete).
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from codeloom.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Practice(Base):
    """
    A medical practice (tenant) using Codeloom.

    Lifecycle:
        1. Created by onboarding on plan 'plan_a'
        2. Plan may be changed later; plan_since records when
        3. Configuration row is created alongside (see PracticeConfiguration)
    """

    __tablename__ = "practices"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=_new_id,
        comment="Opaque practice identifier (UUID text)",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name of the practice",
    )

    # One of the keys in codeloom.plans.PLANS; unknown keys read as plan_a
    plan_key: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="plan_a",
        server_default=text("'plan_a'"),
        comment="Subscription plan key",
    )

    plan_since: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When the current plan took effect (UTC)",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this practice was created (UTC)",
    )

    def __repr__(self) -> str:
        return f"<Practice(id={self.id}, name='{self.name}', plan_key='{self.plan_key}')>"


class PracticeConfiguration(Base):
    """
    Per-practice feature configuration.

    enabled_specialties_json holds a JSON array of specialty keys, e.g.
    '["primary_care"]'. The service layer encodes and decodes it.
    """

    __tablename__ = "practice_configurations"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    practice_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("practices.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )

    # mock | openai | anthropic
    llm_mode: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        default="mock",
        server_default=text("'mock'"),
    )

    enabled_specialties_json: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="[]",
        server_default=text("'[]'"),
    )

    provider_can_edit_codes: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    def __repr__(self) -> str:
        return (
            f"<PracticeConfiguration(practice_id={self.practice_id}, "
            f"llm_mode='{self.llm_mode}')>"
        )
