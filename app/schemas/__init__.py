"""
app/schemas package marker.
"""

from app.schemas.riot_api import (
    RiotAccount,
    RiotLeagueEntry,
    RiotMatch,
    RiotParticipant,
    RiotSummoner,
)
from app.schemas.summoner import (
    ProfileInsightListResponse,
    SummonerLookupRequest,
    SummonerProfileResponse,
    SummonerTotalFailureResponse,
)

__all__ = [
    "ProfileInsightListResponse",
    "RiotAccount",
    "RiotLeagueEntry",
    "RiotMatch",
    "RiotParticipant",
    "RiotSummoner",
    "SummonerLookupRequest",
    "SummonerProfileResponse",
    "SummonerTotalFailureResponse",
]
