"""
app/acquisition/normalizer.py

Maps every source result type onto the canonical profile.

One mapping function per result type; no function inspects which optional
keys happen to exist. All functions are pure.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any

from app.domain.player_profile import (
    CanonicalProfile,
    ChampionAggregate,
    Identity,
    InsightItem,
    MatchRecord,
    RankedEntry,
    StaticReferenceData,
    Statistics,
    SummonerInfo,
    profile_id_for,
)
from app.domain.source_results import (
    LeagueOfGraphsMatch,
    LeagueOfGraphsResult,
    MobalyticsResult,
    OpggResult,
    RiotApiResult,
    RiotMatchSnapshot,
    ScrapedMatchRow,
    ScrapedRankedRow,
    SourceResult,
    StaticDataResult,
)

# CS/min above this is treated as a mis-read duration.
MAX_PLAUSIBLE_CS_PER_MINUTE = 12.0

STATIC_FALLBACK_INSIGHT = InsightItem(
    insight_type="error",
    title="Limited Static Data Only",
    description=(
        "Player statistics are unavailable from every source right now. "
        "Only general champion and item data could be loaded."
    ),
    priority=1,
)


# ---------------------------------------------------------------------------
# Shared derivations
# ---------------------------------------------------------------------------


def _non_negative_int(value: Any) -> int:
    try:
        return max(int(value), 0)
    except (TypeError, ValueError):
        return 0


def _non_negative_float(value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if number > 0 else 0.0


def _clamp_unit(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def compute_statistics(matches: Sequence[MatchRecord]) -> Statistics:
    """
    Derive aggregate statistics from per-match records.

    KDA is the mean of per-match KDA values, not the ratio of summed totals.
    """

    total = len(matches)
    if total == 0:
        return Statistics()

    wins = sum(1 for match in matches if match.win)
    return Statistics(
        total_games=total,
        win_rate=_clamp_unit(wins / total),
        avg_kda=sum(match.kda for match in matches) / total,
        avg_cs=sum(match.cs_per_minute for match in matches) / total,
    )


def aggregate_champions(matches: Iterable[MatchRecord]) -> tuple[ChampionAggregate, ...]:
    """
    Group matches by champion, most played first, ties by name.
    """

    totals: dict[str, dict[str, int]] = {}
    for match in matches:
        name = match.champion.strip()
        if not name:
            continue
        bucket = totals.setdefault(name, {"games": 0, "wins": 0, "kills": 0, "deaths": 0, "assists": 0})
        bucket["games"] += 1
        bucket["wins"] += 1 if match.win else 0
        bucket["kills"] += match.kills
        bucket["deaths"] += match.deaths
        bucket["assists"] += match.assists

    aggregates = [
        ChampionAggregate(
            champion=name,
            games=bucket["games"],
            wins=bucket["wins"],
            kills=bucket["kills"],
            deaths=bucket["deaths"],
            assists=bucket["assists"],
            win_rate=bucket["wins"] / bucket["games"],
            kda=(bucket["kills"] + bucket["assists"]) / max(bucket["deaths"], 1),
        )
        for name, bucket in totals.items()
    ]
    aggregates.sort(key=lambda item: (-item.games, item.champion))
    return tuple(aggregates)


def _summoner(
    *,
    identity: Identity | None,
    name: str,
    tag_line: str,
    region: str,
    level: int = 0,
    profile_icon_id: int = 0,
) -> SummonerInfo:
    profile_id = identity.profile_id if identity is not None else profile_id_for(name, tag_line, region)
    return SummonerInfo(
        name=name,
        tag_line=tag_line,
        level=_non_negative_int(level),
        profile_icon_id=_non_negative_int(profile_icon_id),
        region=region,
        id=profile_id,
    )


def _build_profile(
    *,
    summoner: SummonerInfo,
    data_source: str,
    ranked: Sequence[RankedEntry],
    matches: Sequence[MatchRecord],
    statistics: Statistics | None = None,
) -> CanonicalProfile:
    return CanonicalProfile(
        summoner=summoner,
        data_source=data_source,
        ranked=tuple(ranked),
        matches=tuple(matches),
        statistics=statistics or compute_statistics(matches),
        champions=aggregate_champions(matches),
    )


# ---------------------------------------------------------------------------
# OP.GG / Mobalytics
# ---------------------------------------------------------------------------


def _ranked_from_scraped_row(row: ScrapedRankedRow) -> RankedEntry:
    return RankedEntry(
        queue_type=row.queue,
        tier=row.tier.strip().upper() or "UNRANKED",
        rank=row.division.strip().upper(),
        league_points=_non_negative_int(row.league_points),
        wins=_non_negative_int(row.wins or 0),
        losses=_non_negative_int(row.losses or 0),
    )


def _match_from_scraped_row(row: ScrapedMatchRow) -> MatchRecord:
    return MatchRecord(
        champion=row.champion_name.strip(),
        win=row.win,
        kills=_non_negative_int(row.kills),
        deaths=_non_negative_int(row.deaths),
        assists=_non_negative_int(row.assists),
        cs_per_minute=_non_negative_float(row.cs_per_minute),
    )


def map_opgg(result: OpggResult, identity: Identity | None = None) -> CanonicalProfile:
    return _build_profile(
        summoner=_summoner(
            identity=identity,
            name=result.summoner_name,
            tag_line=result.tag_line,
            region=result.region,
            level=result.level,
        ),
        data_source=result.source,
        ranked=[_ranked_from_scraped_row(row) for row in result.ranked],
        matches=[_match_from_scraped_row(row) for row in result.matches],
    )


def map_mobalytics(result: MobalyticsResult, identity: Identity | None = None) -> CanonicalProfile:
    return _build_profile(
        summoner=_summoner(
            identity=identity,
            name=result.summoner_name,
            tag_line=result.tag_line,
            region=result.region,
        ),
        data_source=result.source,
        ranked=[_ranked_from_scraped_row(row) for row in result.ranked],
        matches=[_match_from_scraped_row(row) for row in result.matches],
    )


# ---------------------------------------------------------------------------
# League of Graphs
# ---------------------------------------------------------------------------


def _cs_per_minute(cs: int, duration_minutes: float | None) -> float:
    if not duration_minutes or duration_minutes <= 0:
        return 0.0
    per_minute = cs / duration_minutes
    if 0 <= per_minute <= MAX_PLAUSIBLE_CS_PER_MINUTE:
        return per_minute
    return 0.0


def _match_from_league_of_graphs(match: LeagueOfGraphsMatch) -> MatchRecord:
    return MatchRecord(
        champion=match.champion.strip(),
        win=match.is_victory,
        kills=_non_negative_int(match.kills),
        deaths=_non_negative_int(match.deaths),
        assists=_non_negative_int(match.assists),
        cs_per_minute=_cs_per_minute(_non_negative_int(match.cs), match.duration_minutes),
    )


def map_league_of_graphs(
    result: LeagueOfGraphsResult,
    identity: Identity | None = None,
) -> CanonicalProfile:
    matches = [_match_from_league_of_graphs(match) for match in result.matches]

    statistics: Statistics | None = None
    aggregate = result.statistics
    if aggregate is not None and aggregate.total_games > 0:
        statistics = Statistics(
            total_games=_non_negative_int(aggregate.total_games),
            win_rate=_clamp_unit(aggregate.win_rate),
            avg_kda=_non_negative_float(aggregate.avg_kda),
            avg_cs=_non_negative_float(aggregate.avg_cs),
        )

    return _build_profile(
        summoner=_summoner(
            identity=identity,
            name=result.summoner_name,
            tag_line=result.tag_line,
            region=result.region,
            level=result.level,
        ),
        data_source=result.source,
        ranked=[
            RankedEntry(
                queue_type=entry.queue_type,
                tier=entry.tier.strip().upper() or "UNRANKED",
                rank=entry.rank.strip().upper(),
                league_points=_non_negative_int(entry.league_points),
                wins=_non_negative_int(entry.wins),
                losses=_non_negative_int(entry.losses),
            )
            for entry in result.ranked
        ],
        matches=matches,
        statistics=statistics,
    )


# ---------------------------------------------------------------------------
# Riot API
# ---------------------------------------------------------------------------


def _match_from_riot(snapshot: RiotMatchSnapshot) -> MatchRecord:
    duration_minutes = snapshot.game_duration_seconds / 60
    cs_per_minute = snapshot.total_minions_killed / duration_minutes if duration_minutes > 0 else 0.0
    return MatchRecord(
        champion=snapshot.champion_name.strip(),
        win=snapshot.win,
        kills=_non_negative_int(snapshot.kills),
        deaths=_non_negative_int(snapshot.deaths),
        assists=_non_negative_int(snapshot.assists),
        cs_per_minute=_non_negative_float(cs_per_minute),
    )


def map_riot_api(result: RiotApiResult, identity: Identity | None = None) -> CanonicalProfile:
    return _build_profile(
        summoner=_summoner(
            identity=identity,
            name=result.account.game_name,
            tag_line=result.account.tag_line,
            region=result.region,
            level=result.summoner.summoner_level,
            profile_icon_id=result.summoner.profile_icon_id,
        ),
        data_source=result.source,
        ranked=[
            RankedEntry(
                queue_type=entry.queue_type,
                tier=entry.tier.strip().upper() or "UNRANKED",
                rank=entry.rank.strip().upper(),
                league_points=entry.league_points,
                wins=entry.wins,
                losses=entry.losses,
            )
            for entry in result.league_entries
        ],
        matches=[_match_from_riot(snapshot) for snapshot in result.matches],
    )


# ---------------------------------------------------------------------------
# Static fallback
# ---------------------------------------------------------------------------


def map_static_data(result: StaticDataResult, identity: Identity | None = None) -> CanonicalProfile:
    """
    Build the degraded profile: identity only, no player statistics.
    """

    if identity is not None:
        summoner = _summoner(
            identity=identity,
            name=identity.summoner_name,
            tag_line=identity.tag_line,
            region=identity.region,
        )
    else:
        summoner = SummonerInfo(name="", tag_line="", level=0, profile_icon_id=0, region="", id="")

    return CanonicalProfile(
        summoner=summoner,
        data_source=result.source,
        insights=(STATIC_FALLBACK_INSIGHT,),
        op_score=0,
        static_data=StaticReferenceData(
            version=result.version,
            champions=dict(result.champions),
            items=dict(result.items),
        ),
    )


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


Mapper = Callable[[Any, "Identity | None"], CanonicalProfile]


class ProfileNormalizer:
    """
    Dispatches each result type to its mapping function.
    """

    MAPPERS: dict[type, Mapper] = {
        OpggResult: map_opgg,
        MobalyticsResult: map_mobalytics,
        LeagueOfGraphsResult: map_league_of_graphs,
        RiotApiResult: map_riot_api,
        StaticDataResult: map_static_data,
    }

    def normalize(self, result: SourceResult, identity: Identity | None = None) -> CanonicalProfile:
        mapper = self.MAPPERS.get(type(result))
        if mapper is None:
            raise TypeError(f"No profile mapping for result type {type(result).__name__}.")
        return mapper(result, identity)
