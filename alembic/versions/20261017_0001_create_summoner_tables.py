"""create summoner profile, insight, and source audit tables

Revision ID: 20261017_0001
Revises:
Create Date: 2026-10-17 10:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261017_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "summoner_profiles",
        sa.Column("id", sa.String(length=255), nullable=False),
        sa.Column("summoner_name", sa.String(length=120), nullable=False),
        sa.Column("tag_line", sa.String(length=32), nullable=False),
        sa.Column("region", sa.String(length=16), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False),
        sa.Column("profile_icon_id", sa.Integer(), nullable=False),
        sa.Column("data_source", sa.String(length=32), nullable=False),
        sa.Column("degraded", sa.Boolean(), nullable=False),
        sa.Column("op_score", sa.Integer(), nullable=False),
        sa.Column("failed_sources", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("profile_json", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("last_fetched_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_summoner_profiles"),
    )
    op.create_index("ix_summoner_profiles_region", "summoner_profiles", ["region"], unique=False)
    op.create_index(
        "ix_summoner_profiles_summoner_name_tag_line",
        "summoner_profiles",
        ["summoner_name", "tag_line"],
        unique=False,
    )

    op.create_table(
        "profile_insights",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("profile_id", sa.String(length=255), nullable=False),
        sa.Column("insight_type", sa.String(length=32), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("priority", sa.Integer(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["profile_id"],
            ["summoner_profiles.id"],
            name="fk_profile_insights_profile_id_summoner_profiles",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_profile_insights"),
    )
    op.create_index(
        "ix_profile_insights_profile_id_priority",
        "profile_insights",
        ["profile_id", "priority"],
        unique=False,
    )

    op.create_table(
        "source_error_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("profile_id", sa.String(length=255), nullable=False),
        sa.Column("source", sa.String(length=32), nullable=False),
        sa.Column("operation", sa.String(length=64), nullable=False),
        sa.Column("error_kind", sa.String(length=32), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("context", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_source_error_logs"),
    )
    op.create_index(
        "ix_source_error_logs_source_occurred_at",
        "source_error_logs",
        ["source", "occurred_at"],
        unique=False,
    )
    op.create_index("ix_source_error_logs_profile_id", "source_error_logs", ["profile_id"], unique=False)

    op.create_table(
        "source_fallback_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("profile_id", sa.String(length=255), nullable=False),
        sa.Column("attempted_sources", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("successful_source", sa.String(length=32), nullable=True),
        sa.Column("degraded", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_source_fallback_logs"),
    )
    op.create_index("ix_source_fallback_logs_profile_id", "source_fallback_logs", ["profile_id"], unique=False)
    op.create_index("ix_source_fallback_logs_created_at", "source_fallback_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_source_fallback_logs_created_at", table_name="source_fallback_logs")
    op.drop_index("ix_source_fallback_logs_profile_id", table_name="source_fallback_logs")
    op.drop_table("source_fallback_logs")

    op.drop_index("ix_source_error_logs_profile_id", table_name="source_error_logs")
    op.drop_index("ix_source_error_logs_source_occurred_at", table_name="source_error_logs")
    op.drop_table("source_error_logs")

    op.drop_index("ix_profile_insights_profile_id_priority", table_name="profile_insights")
    op.drop_table("profile_insights")

    op.drop_index("ix_summoner_profiles_summoner_name_tag_line", table_name="summoner_profiles")
    op.drop_index("ix_summoner_profiles_region", table_name="summoner_profiles")
    op.drop_table("summoner_profiles")
