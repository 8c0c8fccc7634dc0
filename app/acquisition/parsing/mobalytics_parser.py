"""
Mobalytics profile page parser.

Mobalytics shows a single current rank badge and, separately, season wins and
losses; matches carry CS per minute directly.
"""

from __future__ import annotations

from bs4 import BeautifulSoup

from app.acquisition.parsing.html_parsers import HTMLExtraction, LP_REGEX, PageParser
from app.domain.player_profile import SOLO_QUEUE, Identity
from app.domain.source_results import MobalyticsResult, ScrapedMatchRow, ScrapedRankedRow


class MobalyticsPageParser(PageParser[MobalyticsResult]):
    def parse_document(
        self,
        *,
        soup: BeautifulSoup,
        identity: Identity,
        source_url: str,
    ) -> MobalyticsResult:
        return MobalyticsResult(
            summoner_name=identity.summoner_name,
            tag_line=identity.tag_line,
            region=identity.region,
            source_url=source_url,
            ranked=self._extract_ranked(soup),
            matches=tuple(self._extract_matches(soup)),
        )

    def _extract_ranked(self, soup: BeautifulSoup) -> tuple[ScrapedRankedRow, ...]:
        rank_text = HTMLExtraction.first_text(soup, self.selectors("rank_tier"))
        parsed = HTMLExtraction.match_tier(rank_text)
        if parsed is None:
            return ()

        tier, division = parsed
        lp_match = LP_REGEX.search(rank_text)
        wins: int | None = None
        losses: int | None = None
        stats = HTMLExtraction.select_first(soup, self.selectors("season_stats"))
        if stats is not None:
            wins = HTMLExtraction.first_int(HTMLExtraction.first_text(stats, self.selectors("stats_wins")))
            losses = HTMLExtraction.first_int(
                HTMLExtraction.first_text(stats, self.selectors("stats_losses"))
            )

        return (
            ScrapedRankedRow(
                queue=SOLO_QUEUE,
                tier=tier,
                division=division,
                league_points=int(lp_match.group(1)) if lp_match else 0,
                wins=wins,
                losses=losses,
            ),
        )

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
