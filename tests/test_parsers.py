"""
tests/test_parsers.py

Page parsers for the scraped sources, run against static HTML fixtures.
"""

from __future__ import annotations

import pytest

from app.acquisition.errors import ErrorKind, ParseFailure
from app.acquisition.parsing import (
    HTMLExtraction,
    LeagueOfGraphsPageParser,
    MobalyticsPageParser,
    OpggPageParser,
)
from app.domain.player_profile import SOLO_QUEUE, SourceName

from html_fixtures import (
    LEAGUE_OF_GRAPHS_EMPTY_PROFILE_PAGE,
    LEAGUE_OF_GRAPHS_PAGE,
    MOBALYTICS_PAGE,
    MOBALYTICS_UNRANKED_PAGE,
    OPGG_PAGE,
)

SOURCE_URL = "https://example.test/summoner"


# ---------------------------------------------------------------------------
# Extraction helpers
# ---------------------------------------------------------------------------


class TestHTMLExtraction:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("5 / 2 / 7", (5, 2, 7)),
            ("10/0/3", (10, 0, 3)),
            ("4-1-9", (4, 1, 9)),
            ("7 / 3", (7, 3, 0)),
            ("", (0, 0, 0)),
            ("Perfect", (0, 0, 0)),
        ],
    )
    def test_split_kda(self, text: str, expected: tuple[int, int, int]) -> None:
        assert HTMLExtraction.split_kda(text) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Gold II", ("GOLD", "II")),
            ("emerald iv 75 LP", ("EMERALD", "IV")),
            ("Master 210 LP", ("MASTER", "I")),
            ("Challenger", ("CHALLENGER", "I")),
            ("Silver", ("SILVER", "")),
            ("Unranked", None),
        ],
    )
    def test_match_tier(self, text: str, expected) -> None:
        assert HTMLExtraction.match_tier(text) == expected

    def test_duration_minutes(self) -> None:
        assert HTMLExtraction.duration_minutes("31:30") == pytest.approx(31.5)
        assert HTMLExtraction.duration_minutes("0:00") is None
        assert HTMLExtraction.duration_minutes("n/a") is None

    def test_number_helpers_fall_back_to_defaults(self) -> None:
        assert HTMLExtraction.first_int("Level 57") == 57
        assert HTMLExtraction.first_int("none", default=-1) == -1
        assert HTMLExtraction.first_float("7.4 CS/min") == pytest.approx(7.4)
        assert HTMLExtraction.first_float("") == 0.0


# ---------------------------------------------------------------------------
# Shared parse guard
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("html", ["", "   \n  "])
def test_empty_page_is_a_parse_failure(context, identity, html: str) -> None:
    parser = OpggPageParser(context.source(SourceName.OPGG))
    with pytest.raises(ParseFailure) as excinfo:
        parser.parse(html=html, identity=identity, source_url=SOURCE_URL)
    assert excinfo.value.kind is ErrorKind.PARSE_FAILURE


# ---------------------------------------------------------------------------
# OP.GG
# ---------------------------------------------------------------------------


class TestOpggParser:
    @pytest.fixture()
    def result(self, context, identity):
        parser = OpggPageParser(context.source(SourceName.OPGG))
        return parser.parse(html=OPGG_PAGE, identity=identity, source_url=SOURCE_URL)

    def test_identity_and_level(self, result) -> None:
        assert result.summoner_name == "Hide on bush"
        assert result.tag_line == "KR1"
        assert result.region == "kr"
        assert result.level == 342
        assert result.source == SourceName.OPGG
        assert result.source_url == SOURCE_URL

    def test_ranked_row(self, result) -> None:
        assert len(result.ranked) == 1
        row = result.ranked[0]
        assert row.queue == SOLO_QUEUE
        assert (row.tier, row.division) == ("GOLD", "II")
        assert row.league_points == 54
        assert (row.wins, row.losses) == (40, 31)

    def test_matches(self, result) -> None:
        assert [match.champion_name for match in result.matches] == ["Ahri", "Lux"]
        first, second = result.matches
        assert first.win is True
        assert (first.kills, first.deaths, first.assists) == (5, 2, 7)
        assert first.cs_per_minute == pytest.approx(7.1)
        assert second.win is False
        assert (second.kills, second.deaths, second.assists) == (1, 6, 3)

    def test_page_without_blocks_yields_empty_result(self, context, identity) -> None:
        parser = OpggPageParser(context.source(SourceName.OPGG))
        result = parser.parse(
            html="<html><body><p>Welcome</p></body></html>",
            identity=identity,
            source_url=SOURCE_URL,
        )
        assert result.ranked == ()
        assert result.matches == ()
        assert result.level == 0


# ---------------------------------------------------------------------------
# Mobalytics
# ---------------------------------------------------------------------------


class TestMobalyticsParser:
    def test_rank_and_season_stats(self, context, identity) -> None:
        parser = MobalyticsPageParser(context.source(SourceName.MOBALYTICS))
        result = parser.parse(html=MOBALYTICS_PAGE, identity=identity, source_url=SOURCE_URL)

        assert len(result.ranked) == 1
        row = result.ranked[0]
        assert (row.tier, row.division, row.league_points) == ("PLATINUM", "IV", 12)
        assert (row.wins, row.losses) == (20, 25)

        assert [match.win for match in result.matches] == [True, False]
        assert (result.matches[0].kills, result.matches[0].deaths, result.matches[0].assists) == (10, 2, 8)
        assert result.matches[1].cs_per_minute == pytest.approx(6.0)

    def test_unranked_page_has_matches_but_no_ranked_rows(self, context, identity) -> None:
        parser = MobalyticsPageParser(context.source(SourceName.MOBALYTICS))
        result = parser.parse(html=MOBALYTICS_UNRANKED_PAGE, identity=identity, source_url=SOURCE_URL)
        assert result.ranked == ()
        assert len(result.matches) == 1
        assert result.matches[0].champion_name == "Azir"


# ---------------------------------------------------------------------------
# League of Graphs
# ---------------------------------------------------------------------------


class TestLeagueOfGraphsParser:
    @pytest.fixture()
    def result(self, context, identity):
        parser = LeagueOfGraphsPageParser(context.source(SourceName.LEAGUE_OF_GRAPHS))
        return parser.parse(html=LEAGUE_OF_GRAPHS_PAGE, identity=identity, source_url=SOURCE_URL)

    def test_level_and_ranked(self, result) -> None:
        assert result.level == 231
        assert len(result.ranked) == 1
        ranked = result.ranked[0]
        assert (ranked.tier, ranked.rank, ranked.league_points) == ("GOLD", "II", 54)
        assert (ranked.wins, ranked.losses) == (40, 31)

    def test_arena_and_kda_less_rows_are_skipped(self, result) -> None:
        assert [match.champion for match in result.matches] == ["Ahri", "Lux"]

    def test_match_fields(self, result) -> None:
        ahri, lux = result.matches
        assert ahri.is_victory and not lux.is_victory
        assert (ahri.kills, ahri.deaths, ahri.assists) == (8, 2, 10)
        assert ahri.cs == 210
        assert ahri.duration_minutes == pytest.approx(30.0)
        assert ahri.played_ago == "2 hours ago"
        assert lux.played_ago == ""

    def test_aggregate_statistics(self, result) -> None:
        stats = result.statistics
        assert stats is not None
        assert stats.total_games == 71
        assert stats.win_rate == pytest.approx(0.563)
        assert stats.avg_kda == pytest.approx(3.05)
        assert stats.avg_cs == pytest.approx(6.5)

    def test_profile_without_season_data(self, context, identity) -> None:
        parser = LeagueOfGraphsPageParser(context.source(SourceName.LEAGUE_OF_GRAPHS))
        result = parser.parse(
            html=LEAGUE_OF_GRAPHS_EMPTY_PROFILE_PAGE,
            identity=identity,
            source_url=SOURCE_URL,
        )
        assert result.level == 12
        assert result.ranked == ()
        assert result.matches == ()
        assert result.statistics is None
