"""
League of Graphs summoner page parser.

Season numbers on League of Graphs are rendered as free text ("Level 231",
"Gold II 54 LP", "Wins: 40", "Losses: 31"), so they are read with patterns over
the page text; the match list uses configured selectors.
"""

from __future__ import annotations

import re

from bs4 import BeautifulSoup, Tag

from app.acquisition.parsing.html_parsers import (
    APEX_TIERS,
    HTMLExtraction,
    KDA_TRIPLE_REGEX,
    PageParser,
)
from app.domain.player_profile import SOLO_QUEUE, Identity
from app.domain.source_results import (
    LeagueOfGraphsAggregate,
    LeagueOfGraphsMatch,
    LeagueOfGraphsRanked,
    LeagueOfGraphsResult,
)

LEVEL_REGEX = re.compile(r"Level\s+(\d+)")
RANK_LINE_REGEX = re.compile(
    r"\b(Iron|Bronze|Silver|Gold|Platinum|Emerald|Diamond|Master|Grandmaster|Challenger)\s+"
    r"(?:(IV|V|I{1,3})\s+)?(\d+)\s+LP",
    flags=re.IGNORECASE,
)
WINS_REGEX = re.compile(r"Wins:\s*(\d+)")
LOSSES_REGEX = re.compile(r"Losses:\s*(\d+)")
AVERAGE_KDA_LABEL = re.compile(r"Average KDA", flags=re.IGNORECASE)

# CS/min outside this range comes from mis-parsed rows.
MAX_PLAUSIBLE_CS_PER_MINUTE = 12.0


class LeagueOfGraphsPageParser(PageParser[LeagueOfGraphsResult]):
    def parse_document(
        self,
        *,
        soup: BeautifulSoup,
        identity: Identity,
        source_url: str,
    ) -> LeagueOfGraphsResult:
        page_text = HTMLExtraction.clean_text(soup.get_text(" ", strip=True))
        level_match = LEVEL_REGEX.search(page_text)
        wins_match = WINS_REGEX.search(page_text)
        losses_match = LOSSES_REGEX.search(page_text)
        wins = int(wins_match.group(1)) if wins_match else 0
        losses = int(losses_match.group(1)) if losses_match else 0

        ranked = self._extract_ranked(page_text, wins=wins, losses=losses)
        matches = tuple(self._extract_matches(soup))
        kda_totals = self._average_kda(soup)

        statistics: LeagueOfGraphsAggregate | None = None
        if ranked or kda_totals is not None:
            statistics = self._aggregate(wins=wins, losses=losses, kda=kda_totals, matches=matches)

        return LeagueOfGraphsResult(
            summoner_name=identity.summoner_name,
            tag_line=identity.tag_line,
            region=identity.region,
            level=int(level_match.group(1)) if level_match else 0,
            source_url=source_url,
            ranked=ranked,
            matches=matches,
            statistics=statistics,
        )

    @staticmethod
    def _extract_ranked(page_text: str, *, wins: int, losses: int) -> tuple[LeagueOfGraphsRanked, ...]:
        rank_match = RANK_LINE_REGEX.search(page_text)
        if rank_match is None and wins == 0 and losses == 0:
            return ()

        tier = "UNRANKED"
        rank = ""
        league_points = 0
        if rank_match is not None:
            tier = rank_match.group(1).upper()
            rank = (rank_match.group(2) or "").upper()
            if tier in APEX_TIERS and not rank:
                rank = "I"
            league_points = int(rank_match.group(3))

        return (
            LeagueOfGraphsRanked(
                queue_type=SOLO_QUEUE,
                tier=tier,
                rank=rank,
                league_points=league_points,
                wins=wins,
                losses=losses,
            ),
        )

    def _extract_matches(self, soup: BeautifulSoup) -> list[LeagueOfGraphsMatch]:
        matches: list[LeagueOfGraphsMatch] = []
        for row in HTMLExtraction.select_elements(soup, self.selectors("match_rows")):
            kda_match = KDA_TRIPLE_REGEX.search(HTMLExtraction.first_text(row, self.selectors("match_kda")))
            if kda_match is None:
                continue
            is_win = HTMLExtraction.select_first(row, self.selectors("match_win")) is not None
            matches.append(
                LeagueOfGraphsMatch(
                    champion=self._champion_name(row),
                    result="Victory" if is_win else "Defeat",
                    kills=int(float(kda_match.group(1))),
                    deaths=int(float(kda_match.group(2))),
                    assists=int(float(kda_match.group(3))),
                    cs=HTMLExtraction.first_int(HTMLExtraction.first_text(row, self.selectors("match_cs"))),
                    duration_minutes=HTMLExtraction.duration_minutes(
                        HTMLExtraction.first_text(row, self.selectors("match_duration"))
                    ),
                    played_ago=HTMLExtraction.first_text(row, self.selectors("match_time_ago")),
                )
            )
        return matches

    def _champion_name(self, row: Tag) -> str:
        node = HTMLExtraction.select_first(row, self.selectors("match_champion"))
        if node is None:
            return ""
        title = node.get("title")
        if isinstance(title, str) and title.strip():
            return title.strip()
        return HTMLExtraction.clean_text(node.get_text(" ", strip=True))

    @staticmethod
    def _average_kda(soup: BeautifulSoup) -> tuple[float, float, float] | None:
        label = soup.find(string=AVERAGE_KDA_LABEL)
        if label is None:
            return None
        node = label.parent
        for _ in range(4):
            if node is None:
                break
            match = KDA_TRIPLE_REGEX.search(node.get_text(" ", strip=True))
            if match is not None:
                return float(match.group(1)), float(match.group(2)), float(match.group(3))
            node = node.parent
        return None

    @staticmethod
    def _aggregate(
        *,
        wins: int,
        losses: int,
        kda: tuple[float, float, float] | None,
        matches: tuple[LeagueOfGraphsMatch, ...],
    ) -> LeagueOfGraphsAggregate:
        total_games = wins + losses
        kills, deaths, assists = kda or (0.0, 0.0, 0.0)
        if deaths > 0:
            avg_kda = round((kills + assists) / deaths, 2)
        else:
            avg_kda = round(kills + assists, 2)

        per_minute = [
            match.cs / match.duration_minutes
            for match in matches
            if match.duration_minutes
            and 0 <= match.cs / match.duration_minutes <= MAX_PLAUSIBLE_CS_PER_MINUTE
        ]
        avg_cs = round(sum(per_minute) / len(per_minute), 1) if per_minute else 0.0

        return LeagueOfGraphsAggregate(
            total_games=total_games,
            win_rate=round(wins / total_games, 3) if total_games > 0 else 0.0,
            avg_kda=avg_kda,
            avg_cs=avg_cs,
            kills=kills,
            deaths=deaths,
            assists=assists,
        )
