"""
db/models/summoner_profile.py

Latest canonical profile per player, upserted on every successful lookup.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Boolean, DateTime, Index, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin

if TYPE_CHECKING:
    from db.models.profile_insight import ProfileInsight


class SummonerProfile(TimestampMixin, Base):
    __tablename__ = "summoner_profiles"

    id: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
        comment="Derived from name, tag line, and region",
    )
    summoner_name: Mapped[str] = mapped_column(String(120), nullable=False)
    tag_line: Mapped[str] = mapped_column(String(32), nullable=False)
    region: Mapped[str] = mapped_column(String(16), nullable=False)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    profile_icon_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    data_source: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="riot_api, opgg, mobalytics, league_of_graphs, data_dragon",
    )
    degraded: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    op_score: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_sources: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)
    profile_json: Mapped[dict[str, Any]] = mapped_column(
        JSONB,
        nullable=False,
        comment="Full canonical profile as returned to the caller",
    )
    last_fetched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    insights: Mapped[list["ProfileInsight"]] = relationship(
        back_populates="profile",
        cascade="all, delete-orphan",
        order_by="ProfileInsight.priority",
    )

    __table_args__ = (
        Index("ix_summoner_profiles_region", "region"),
        Index("ix_summoner_profiles_summoner_name_tag_line", "summoner_name", "tag_line"),
    )
