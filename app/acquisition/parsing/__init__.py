"""
Per-source page parsers.
"""

from app.acquisition.parsing.html_parsers import HTMLExtraction, PageParser
from app.acquisition.parsing.league_of_graphs_parser import LeagueOfGraphsPageParser
from app.acquisition.parsing.mobalytics_parser import MobalyticsPageParser
from app.acquisition.parsing.opgg_parser import OpggPageParser

__all__ = [
    "HTMLExtraction",
    "LeagueOfGraphsPageParser",
    "MobalyticsPageParser",
    "OpggPageParser",
    "PageParser",
]
