"""
app/domain/player_profile.py

Request identity and canonical player profile models.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any


class SourceName:
    RIOT_API = "riot_api"
    OPGG = "opgg"
    MOBALYTICS = "mobalytics"
    LEAGUE_OF_GRAPHS = "league_of_graphs"
    DATA_DRAGON = "data_dragon"


ALL_SOURCES = "all"

# Fixed failover order for the scraped sources.
SCRAPED_SOURCE_PRIORITY: tuple[str, ...] = (
    SourceName.OPGG,
    SourceName.MOBALYTICS,
    SourceName.LEAGUE_OF_GRAPHS,
)

PREFERRED_SOURCE_CHOICES = frozenset(
    {ALL_SOURCES, SourceName.RIOT_API, *SCRAPED_SOURCE_PRIORITY}
)

SOLO_QUEUE = "RANKED_SOLO_5x5"

_PROFILE_ID_PATTERN = re.compile(r"[^a-zA-Z0-9_]")


def profile_id_for(summoner_name: str, tag_line: str, region: str) -> str:
    """
    Stable storage key for one player on one region.
    """

    return _PROFILE_ID_PATTERN.sub("_", f"{summoner_name}_{tag_line}_{region}")


@dataclass(frozen=True)
class Identity:
    """
    Who to look up and which sources the caller allows.
    """

    summoner_name: str
    tag_line: str
    region: str
    preferred_source: str = ALL_SOURCES
    allow_authenticated_source: bool = False

    def __post_init__(self) -> None:
        name = self.summoner_name.strip()
        tag = self.tag_line.strip().lstrip("#")
        region = self.region.strip().lower()
        preferred = (self.preferred_source or ALL_SOURCES).strip().lower()
        if not name or not tag or not region:
            raise ValueError("Summoner name, tag line, and region are required.")
        if preferred not in PREFERRED_SOURCE_CHOICES:
            allowed = ", ".join(sorted(PREFERRED_SOURCE_CHOICES))
            raise ValueError(
                f"Unknown preferred source '{self.preferred_source}'. Allowed values: {allowed}."
            )
        object.__setattr__(self, "summoner_name", name)
        object.__setattr__(self, "tag_line", tag)
        object.__setattr__(self, "region", region)
        object.__setattr__(self, "preferred_source", preferred)

    @property
    def profile_id(self) -> str:
        return profile_id_for(self.summoner_name, self.tag_line, self.region)

    @property
    def display_name(self) -> str:
        return f"{self.summoner_name}#{self.tag_line}"


@dataclass(frozen=True)
class RankedEntry:
    queue_type: str
    tier: str
    rank: str
    league_points: int
    wins: int
    losses: int

    @property
    def games(self) -> int:
        return self.wins + self.losses

    def to_dict(self) -> dict[str, Any]:
        return {
            "queueType": self.queue_type,
            "tier": self.tier,
            "rank": self.rank,
            "leaguePoints": self.league_points,
            "wins": self.wins,
            "losses": self.losses,
        }


@dataclass(frozen=True)
class MatchRecord:
    champion: str
    win: bool
    kills: int
    deaths: int
    assists: int
    cs_per_minute: float

    @property
    def kda(self) -> float:
        return (self.kills + self.assists) / max(self.deaths, 1)

    def to_dict(self) -> dict[str, Any]:
        return {
            "champion": self.champion,
            "win": self.win,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "csPerMinute": self.cs_per_minute,
        }


@dataclass(frozen=True)
class Statistics:
    total_games: int = 0
    win_rate: float = 0.0
    avg_kda: float = 0.0
    avg_cs: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalGames": self.total_games,
            "winRate": self.win_rate,
            "avgKDA": self.avg_kda,
            "avgCS": self.avg_cs,
        }


@dataclass(frozen=True)
class ChampionAggregate:
    """
    Per-champion totals over the matches of one profile.
    """

    champion: str
    games: int
    wins: int
    kills: int
    deaths: int
    assists: int
    win_rate: float
    kda: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "champion": self.champion,
            "games": self.games,
            "wins": self.wins,
            "kills": self.kills,
            "deaths": self.deaths,
            "assists": self.assists,
            "winRate": self.win_rate,
            "kda": self.kda,
        }


@dataclass(frozen=True)
class InsightItem:
    """
    One coaching insight. Lower priority values are more urgent.
    """

    insight_type: str
    title: str
    description: str
    priority: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.insight_type,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class SummonerInfo:
    name: str
    tag_line: str
    level: int
    profile_icon_id: int
    region: str
    id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "tagLine": self.tag_line,
            "level": self.level,
            "profileIconId": self.profile_icon_id,
            "region": self.region,
            "id": self.id,
        }


@dataclass(frozen=True)
class StaticReferenceData:
    """
    Game-wide reference data returned by the static fallback.
    """

    version: str
    champions: dict[str, Any] = field(default_factory=dict)
    items: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "champions": self.champions,
            "items": self.items,
        }


@dataclass(frozen=True)
class CanonicalProfile:
    """
    The single normalized player summary every source is mapped into.
    """

    summoner: SummonerInfo
    data_source: str
    ranked: tuple[RankedEntry, ...] = ()
    matches: tuple[MatchRecord, ...] = ()
    statistics: Statistics = field(default_factory=Statistics)
    champions: tuple[ChampionAggregate, ...] = ()
    insights: tuple[InsightItem, ...] = ()
    op_score: int = 0
    failed_sources: tuple[str, ...] = ()
    static_data: StaticReferenceData | None = None

    @property
    def solo_queue(self) -> RankedEntry | None:
        for entry in self.ranked:
            if entry.queue_type == SOLO_QUEUE:
                return entry
        return None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "summoner": self.summoner.to_dict(),
            "ranked": [entry.to_dict() for entry in self.ranked],
            "matches": [match.to_dict() for match in self.matches],
            "statistics": self.statistics.to_dict(),
            "champions": [champion.to_dict() for champion in self.champions],
            "insights": [insight.to_dict() for insight in self.insights],
            "opScore": self.op_score,
            "dataSource": self.data_source,
            "failedSources": list(self.failed_sources),
        }
        if self.static_data is not None:
            payload["staticData"] = self.static_data.to_dict()
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
