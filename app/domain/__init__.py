"""
app/domain package marker.
"""

from app.domain.player_profile import (
    CanonicalProfile,
    ChampionAggregate,
    Identity,
    InsightItem,
    MatchRecord,
    RankedEntry,
    SourceName,
    Statistics,
    SummonerInfo,
)
from app.domain.source_failure import FailureRecord

__all__ = [
    "CanonicalProfile",
    "ChampionAggregate",
    "FailureRecord",
    "Identity",
    "InsightItem",
    "MatchRecord",
    "RankedEntry",
    "SourceName",
    "Statistics",
    "SummonerInfo",
]
