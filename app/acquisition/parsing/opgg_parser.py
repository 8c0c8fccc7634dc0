"""
OP.GG summoner page parser.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag

from app.acquisition.parsing.html_parsers import HTMLExtraction, LP_REGEX, PageParser
from app.domain.player_profile import SOLO_QUEUE, Identity
from app.domain.source_results import OpggResult, ScrapedMatchRow, ScrapedRankedRow


class OpggPageParser(PageParser[OpggResult]):
    def parse_document(
        self,
        *,
        soup: BeautifulSoup,
        identity: Identity,
        source_url: str,
    ) -> OpggResult:
        return OpggResult(
            summoner_name=identity.summoner_name,
            tag_line=identity.tag_line,
            region=identity.region,
            level=HTMLExtraction.first_int(HTMLExtraction.first_text(soup, self.selectors("level"))),
            source_url=source_url,
            ranked=tuple(self._extract_ranked(soup)),
            matches=tuple(self._extract_matches(soup)),
        )

    def _extract_ranked(self, soup: BeautifulSoup) -> list[ScrapedRankedRow]:
        rows: list[ScrapedRankedRow] = []
        seen: set[tuple[str, str]] = set()
        for node in HTMLExtraction.select_elements(soup, self.selectors("ranked_tier")):
            parsed = HTMLExtraction.match_tier(HTMLExtraction.clean_text(node.get_text(" ", strip=True)))
            if parsed is None or parsed in seen:
                continue
            seen.add(parsed)
            tier, division = parsed
            container = HTMLExtraction.closest(node, self.selectors("ranked_container")) or node
            rows.append(
                ScrapedRankedRow(
                    queue=SOLO_QUEUE,
                    tier=tier,
                    division=division,
                    league_points=self._league_points(container),
                    wins=HTMLExtraction.first_int(
                        HTMLExtraction.first_text(container, self.selectors("ranked_wins"))
                    ),
                    losses=HTMLExtraction.first_int(
                        HTMLExtraction.first_text(container, self.selectors("ranked_losses"))
                    ),
                )
            )
        return rows

    def _league_points(self, container: Tag) -> int:
        text = HTMLExtraction.first_text(container, self.selectors("ranked_lp"))
        if text:
            return HTMLExtraction.first_int(text)
        match = LP_REGEX.search(container.get_text(" ", strip=True))
        return int(match.group(1)) if match else 0

    def _extract_matches(self, soup: BeautifulSoup) -> list[ScrapedMatchRow]:
        matches: list[ScrapedMatchRow] = []
        for row in HTMLExtraction.select_elements(soup, self.selectors("match_rows")):
            kills, deaths, assists = HTMLExtraction.split_kda(
                HTMLExtraction.first_text(row, self.selectors("match_kda"))
            )
            matches.append(
                ScrapedMatchRow(
                    champion_name=HTMLExtraction.first_text(row, self.selectors("match_champion")),
                    win=HTMLExtraction.select_first(row, self.selectors("match_win")) is not None,
                    kills=kills,
                    deaths=deaths,
                    assists=assists,
                    cs_per_minute=HTMLExtraction.first_float(
                        HTMLExtraction.first_text(row, self.selectors("match_cs"))
                    ),
                )
            )
        return matches
