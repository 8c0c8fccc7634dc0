"""
app/services package marker.
"""

from app.services.summoner_service import (
    SummonerLookupService,
    build_orchestrator,
    get_summoner_lookup_service,
)

__all__ = [
    "SummonerLookupService",
    "build_orchestrator",
    "get_summoner_lookup_service",
]
