"""
app/schemas/summoner.py

Request and response schemas for summoner lookups.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from app.domain.player_profile import ALL_SOURCES, PREFERRED_SOURCE_CHOICES, Identity


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SummonerLookupRequest(_CamelModel):
    """
    API request body for one summoner lookup.
    """

    summoner_name: str = Field(..., min_length=1, max_length=64)
    tag_line: str = Field(..., min_length=1, max_length=16)
    region: str = Field(..., min_length=2, max_length=8)
    data_source: str = Field(default=ALL_SOURCES)
    use_riot_api: bool = False

    @field_validator("summoner_name", "tag_line", "region")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("data_source")
    @classmethod
    def _known_source(cls, value: str) -> str:
        normalized = (value or ALL_SOURCES).strip().lower()
        if normalized not in PREFERRED_SOURCE_CHOICES:
            allowed = ", ".join(sorted(PREFERRED_SOURCE_CHOICES))
            raise ValueError(f"unknown data source '{value}'; allowed: {allowed}")
        return normalized

    def to_identity(self) -> Identity:
        return Identity(
            summoner_name=self.summoner_name,
            tag_line=self.tag_line,
            region=self.region,
            preferred_source=self.data_source,
            allow_authenticated_source=self.use_riot_api,
        )


class SummonerInfoResponse(_CamelModel):
    name: str
    tag_line: str
    level: int = Field(..., ge=0)
    profile_icon_id: int = Field(..., ge=0)
    region: str
    id: str


class RankedEntryResponse(_CamelModel):
    queue_type: str
    tier: str
    rank: str
    league_points: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    losses: int = Field(..., ge=0)


class MatchRecordResponse(_CamelModel):
    champion: str
    win: bool
    kills: int = Field(..., ge=0)
    deaths: int = Field(..., ge=0)
    assists: int = Field(..., ge=0)
    cs_per_minute: float = Field(..., ge=0)


class StatisticsResponse(_CamelModel):
    total_games: int = Field(..., ge=0)
    win_rate: float = Field(..., ge=0, le=1)
    avg_kda: float = Field(..., ge=0, alias="avgKDA")
    avg_cs: float = Field(..., ge=0, alias="avgCS")


class ChampionAggregateResponse(_CamelModel):
    champion: str
    games: int = Field(..., ge=0)
    wins: int = Field(..., ge=0)
    kills: int = Field(..., ge=0)
    deaths: int = Field(..., ge=0)
    assists: int = Field(..., ge=0)
    win_rate: float = Field(..., ge=0, le=1)
    kda: float = Field(..., ge=0)


class InsightResponse(_CamelModel):
    type: str
    title: str
    description: str
    priority: int = Field(..., ge=1)


class StaticDataResponse(_CamelModel):
    version: str
    champions: dict[str, Any] = Field(default_factory=dict)
    items: dict[str, Any] = Field(default_factory=dict)


class SummonerProfileResponse(_CamelModel):
    """
    Canonical profile as returned to API callers.
    """

    summoner: SummonerInfoResponse
    ranked: list[RankedEntryResponse] = Field(default_factory=list)
    matches: list[MatchRecordResponse] = Field(default_factory=list)
    statistics: StatisticsResponse
    champions: list[ChampionAggregateResponse] = Field(default_factory=list)
    insights: list[InsightResponse] = Field(default_factory=list)
    op_score: int = Field(..., ge=0, le=100)
    data_source: str
    failed_sources: list[str] = Field(default_factory=list)
    static_data: StaticDataResponse | None = None


class SummonerTotalFailureResponse(_CamelModel):
    """
    Error envelope returned with 503 when every source failed.
    """

    class SummonerRef(_CamelModel):
        name: str
        tag_line: str

    error: str
    details: str
    failed_sources: list[str]
    summoner: SummonerRef


class ProfileInsightListResponse(_CamelModel):
    profile_id: str
    insights: list[InsightResponse] = Field(default_factory=list)
