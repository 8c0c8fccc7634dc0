"""
app/schemas/riot_api.py

Typed payloads for the Riot Games API responses the acquisition layer reads.
Only the fields the canonical profile needs are declared; everything else in
the upstream payload is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _RiotModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class RiotAccount(_RiotModel):
    puuid: str
    game_name: str = Field(..., alias="gameName")
    tag_line: str = Field(..., alias="tagLine")


class RiotSummoner(_RiotModel):
    puuid: str
    summoner_id: str | None = Field(default=None, alias="id")
    summoner_level: int = Field(default=0, alias="summonerLevel", ge=0)
    profile_icon_id: int = Field(default=0, alias="profileIconId", ge=0)


class RiotLeagueEntry(_RiotModel):
    queue_type: str = Field(..., alias="queueType")
    tier: str = ""
    rank: str = ""
    league_points: int = Field(default=0, alias="leaguePoints", ge=0)
    wins: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)


class RiotParticipant(_RiotModel):
    puuid: str
    champion_name: str = Field(..., alias="championName")
    win: bool = False
    kills: int = Field(default=0, ge=0)
    deaths: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    total_minions_killed: int = Field(default=0, alias="totalMinionsKilled", ge=0)


class RiotMatchInfo(_RiotModel):
    game_duration: int = Field(default=0, alias="gameDuration", ge=0)
    participants: list[RiotParticipant] = Field(default_factory=list)


class RiotMatch(_RiotModel):
    info: RiotMatchInfo
