"""
app/domain/source_results.py

One explicit result type per source. Each adapter returns exactly one of these
and the normalizer owns one mapping function per type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from app.domain.player_profile import SourceName
from app.schemas.riot_api import RiotAccount, RiotLeagueEntry, RiotSummoner


# ---------------------------------------------------------------------------
# OP.GG and Mobalytics share a row layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScrapedRankedRow:
    queue: str
    tier: str
    division: str
    league_points: int
    wins: int | None = None
    losses: int | None = None


@dataclass(frozen=True)
class ScrapedMatchRow:
    champion_name: str
    win: bool
    kills: int
    deaths: int
    assists: int
    cs_per_minute: float


@dataclass(frozen=True)
class OpggResult:
    summoner_name: str
    tag_line: str
    region: str
    level: int
    source_url: str
    ranked: tuple[ScrapedRankedRow, ...] = ()
    matches: tuple[ScrapedMatchRow, ...] = ()

    source: str = field(default=SourceName.OPGG, init=False)


@dataclass(frozen=True)
class MobalyticsResult:
    summoner_name: str
    tag_line: str
    region: str
    source_url: str
    ranked: tuple[ScrapedRankedRow, ...] = ()
    matches: tuple[ScrapedMatchRow, ...] = ()

    source: str = field(default=SourceName.MOBALYTICS, init=False)


# ---------------------------------------------------------------------------
# League of Graphs
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LeagueOfGraphsRanked:
    queue_type: str
    tier: str
    rank: str
    league_points: int
    wins: int
    losses: int


@dataclass(frozen=True)
class LeagueOfGraphsMatch:
    champion: str
    result: str
    kills: int
    deaths: int
    assists: int
    cs: int
    duration_minutes: float | None = None
    played_ago: str = ""

    @property
    def is_victory(self) -> bool:
        return self.result.strip().lower() == "victory"


@dataclass(frozen=True)
class LeagueOfGraphsAggregate:
    """
    Season totals the site publishes next to the match list.
    """

    total_games: int
    win_rate: float
    avg_kda: float
    avg_cs: float
    kills: float = 0.0
    deaths: float = 0.0
    assists: float = 0.0


@dataclass(frozen=True)
class LeagueOfGraphsResult:
    summoner_name: str
    tag_line: str
    region: str
    level: int
    source_url: str
    ranked: tuple[LeagueOfGraphsRanked, ...] = ()
    matches: tuple[LeagueOfGraphsMatch, ...] = ()
    statistics: LeagueOfGraphsAggregate | None = None

    source: str = field(default=SourceName.LEAGUE_OF_GRAPHS, init=False)


# ---------------------------------------------------------------------------
# Riot API
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RiotMatchSnapshot:
    """
    The requested player's line from one match.
    """

    match_id: str
    champion_name: str
    win: bool
    kills: int
    deaths: int
    assists: int
    total_minions_killed: int
    game_duration_seconds: int


@dataclass(frozen=True)
class RiotApiResult:
    region: str
    account: RiotAccount
    summoner: RiotSummoner
    league_entries: tuple[RiotLeagueEntry, ...] = ()
    matches: tuple[RiotMatchSnapshot, ...] = ()

    source: str = field(default=SourceName.RIOT_API, init=False)


# ---------------------------------------------------------------------------
# Static fallback
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StaticDataResult:
    """
    Game-wide reference data. Carries no player-specific fields.
    """

    version: str
    champions: dict[str, Any] = field(default_factory=dict)
    items: dict[str, Any] = field(default_factory=dict)

    source: str = field(default=SourceName.DATA_DRAGON, init=False)


SourceResult = Union[
    OpggResult,
    MobalyticsResult,
    LeagueOfGraphsResult,
    RiotApiResult,
    StaticDataResult,
]
