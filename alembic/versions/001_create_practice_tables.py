"""Create practices and practice_configurations tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

What:  Creates the `practices` table and the one-to-one
       `practice_configurations` table.
How:   Portable column types only, so the migration runs on PostgreSQL and
       SQLite alike.

Rollback: downgrade() drops both tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "practices",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque practice identifier (UUID text)",
        ),
        sa.Column(
            "name",
            sa.String(255),
            nullable=False,
            comment="Display name of the practice",
        ),
        sa.Column(
            "plan_key",
            sa.String(32),
            nullable=False,
            server_default=sa.text("'plan_a'"),
            comment="Subscription plan key",
        ),
        sa.Column(
            "plan_since",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When the current plan took effect (UTC)",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
            comment="When this practice was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "practice_configurations",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("practice_id", sa.String(36), nullable=False),
        sa.Column(
            "llm_mode",
            sa.String(32),
            nullable=False,
            server_default=sa.text("'mock'"),
        ),
        sa.Column(
            "enabled_specialties_json",
            sa.Text(),
            nullable=False,
            server_default=sa.text("'[]'"),
        ),
        sa.Column(
            "provider_can_edit_codes",
            sa.Boolean(),
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.ForeignKeyConstraint(["practice_id"], ["practices.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("practice_id"),
    )


def downgrade() -> None:
    op.drop_table("practice_configurations")
    op.drop_table("practices")
