"""
Source adapter exports.
"""

from app.acquisition.adapters.base import FetchScope, SourceAdapter, encode_slug
from app.acquisition.adapters.data_dragon import DataDragonAdapter
from app.acquisition.adapters.riot_api import RiotApiAdapter
from app.acquisition.adapters.scraped import (
    LeagueOfGraphsAdapter,
    MobalyticsAdapter,
    OpggAdapter,
    ScrapedSourceAdapter,
)

__all__ = [
    "DataDragonAdapter",
    "FetchScope",
    "LeagueOfGraphsAdapter",
    "MobalyticsAdapter",
    "OpggAdapter",
    "RiotApiAdapter",
    "ScrapedSourceAdapter",
    "SourceAdapter",
    "encode_slug",
]
