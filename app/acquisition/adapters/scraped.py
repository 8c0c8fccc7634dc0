"""
Adapters for the HTML-scraped community sites.
"""

from __future__ import annotations

from typing import Any, ClassVar

from app.acquisition.adapters.base import FetchScope, SourceAdapter, encode_slug
from app.acquisition.errors import ErrorKind, SourceError
from app.acquisition.parsing import (
    LeagueOfGraphsPageParser,
    MobalyticsPageParser,
    OpggPageParser,
    PageParser,
)
from app.domain.player_profile import Identity, SourceName
from app.domain.source_results import SourceResult


class ScrapedSourceAdapter(SourceAdapter):
    """
    Fetches one summoner page and hands it to the configured page parser.
    """

    parser_class: ClassVar[type[PageParser]]
    lowercase_slug: ClassVar[bool] = False

    def __init__(self, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.parser = self.parser_class(self.config)

    def build_url(self, identity: Identity) -> str:
        return self.config.url_template.format(
            region=self.config.region_code(identity.region),
            slug=encode_slug(identity.summoner_name, identity.tag_line, lowercase=self.lowercase_slug),
        )

    def _fetch(self, scope: FetchScope) -> SourceResult:
        url = self.build_url(scope.identity)

        def scrape() -> SourceResult:
            response = self._get(scope, url)
            html = response.text or ""
            self._raise_if_not_found(html, scope.identity)
            return self.parser.parse(html=html, identity=scope.identity, source_url=url)

        return self._call(
            scope,
            "SCRAPE_SUMMONER",
            scrape,
            url=url,
            selector_version=self.config.selector_version,
        )

    def _raise_if_not_found(self, html: str, identity: Identity) -> None:
        for marker in self.config.not_found_markers:
            if marker in html:
                raise SourceError(
                    ErrorKind.NOT_FOUND,
                    f"Summoner {identity.display_name} not found on {self.source_name}",
                    status_code=200,
                )


class OpggAdapter(ScrapedSourceAdapter):
    source_name = SourceName.OPGG
    parser_class = OpggPageParser


class MobalyticsAdapter(ScrapedSourceAdapter):
    source_name = SourceName.MOBALYTICS
    parser_class = MobalyticsPageParser
    lowercase_slug = True


class LeagueOfGraphsAdapter(ScrapedSourceAdapter):
    source_name = SourceName.LEAGUE_OF_GRAPHS
    parser_class = LeagueOfGraphsPageParser
