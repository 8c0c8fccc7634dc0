"""
db/models/source_fallback_log.py

Audit of which sources were attempted for a lookup and which one answered.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, String, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class SourceFallbackLog(Base):
    __tablename__ = "source_fallback_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    profile_id: Mapped[str] = mapped_column(String(255), nullable=False)
    attempted_sources: Mapped[list[str]] = mapped_column(JSONB, nullable=False)
    successful_source: Mapped[str | None] = mapped_column(
        String(32),
        nullable=True,
        comment="Null when every source failed",
    )
    degraded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_source_fallback_logs_profile_id", "profile_id"),
        Index("ix_source_fallback_logs_created_at", "created_at"),
    )
