"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.profile_insight import ProfileInsight
from db.models.source_error_log import SourceErrorLog
from db.models.source_fallback_log import SourceFallbackLog
from db.models.summoner_profile import SummonerProfile

__all__ = [
    "ProfileInsight",
    "SourceErrorLog",
    "SourceFallbackLog",
    "SummonerProfile",
]
