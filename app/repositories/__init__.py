"""
app/repositories package marker.
"""

from app.repositories.summoner_profile_repository import SummonerProfileRepository

__all__ = ["SummonerProfileRepository"]
