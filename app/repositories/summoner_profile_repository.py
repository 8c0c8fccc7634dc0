"""
app/repositories/summoner_profile_repository.py

Persistence layer for summoner profiles, insights, and source audit logs.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.orm import Session

from app.domain.player_profile import CanonicalProfile
from app.domain.source_failure import FailureRecord
from db.models.profile_insight import ProfileInsight
from db.models.source_error_log import SourceErrorLog
from db.models.source_fallback_log import SourceFallbackLog
from db.models.summoner_profile import SummonerProfile


class SummonerProfileRepository:
    """
    Repository for idempotent profile upserts and append-only audit rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def upsert_profile(
        self,
        profile: CanonicalProfile,
        *,
        degraded: bool,
        fetched_at: datetime | None = None,
    ) -> str:
        """
        Insert or update the profile row keyed by profile id and replace its insights.
        """

        timestamp = fetched_at or datetime.now(timezone.utc)
        summoner = profile.summoner
        values: dict[str, Any] = {
            "id": summoner.id,
            "summoner_name": summoner.name,
            "tag_line": summoner.tag_line,
            "region": summoner.region,
            "level": summoner.level,
            "profile_icon_id": summoner.profile_icon_id,
            "data_source": profile.data_source,
            "degraded": degraded,
            "op_score": profile.op_score,
            "failed_sources": list(profile.failed_sources),
            "profile_json": profile.to_dict(),
            "last_fetched_at": timestamp,
        }
        update_columns = {key: value for key, value in values.items() if key != "id"}
        update_columns["updated_at"] = timestamp

        stmt = (
            insert(SummonerProfile)
            .values(**values)
            .on_conflict_do_update(index_elements=[SummonerProfile.id], set_=update_columns)
        )
        self._session.execute(stmt)

        self._session.execute(delete(ProfileInsight).where(ProfileInsight.profile_id == summoner.id))
        self._session.add_all(
            [
                ProfileInsight(
                    profile_id=summoner.id,
                    insight_type=insight.insight_type,
                    title=insight.title,
                    description=insight.description,
                    priority=insight.priority,
                )
                for insight in profile.insights
            ]
        )
        return summoner.id

    def record_failures(self, profile_id: str, failures: Sequence[FailureRecord]) -> int:
        if not failures:
            return 0
        self._session.add_all(
            [
                SourceErrorLog(
                    profile_id=profile_id,
                    source=record.source,
                    operation=record.operation,
                    error_kind=record.error_kind,
                    message=record.message,
                    context=record.to_dict()["context"],
                    occurred_at=record.timestamp,
                )
                for record in failures
            ]
        )
        return len(failures)

    def record_fallback(
        self,
        profile_id: str,
        *,
        attempted_sources: Sequence[str],
        successful_source: str | None,
        degraded: bool,
    ) -> None:
        self._session.add(
            SourceFallbackLog(
                profile_id=profile_id,
                attempted_sources=list(attempted_sources),
                successful_source=successful_source,
                degraded=degraded,
            )
        )

    def get_insights(self, profile_id: str) -> list[ProfileInsight]:
        stmt = (
            select(ProfileInsight)
            .where(ProfileInsight.profile_id == profile_id)
            .order_by(ProfileInsight.priority, ProfileInsight.title)
        )
        return list(self._session.scalars(stmt).all())

    def profile_exists(self, profile_id: str) -> bool:
        return self._session.get(SummonerProfile, profile_id) is not None
