"""
tests/test_orchestrator.py

Failover ordering, static fallback, total failure, and failure bookkeeping.

Most tests drive the orchestrator with scripted stub adapters; the end-to-end
class wires the real adapters to a scripted HTTP session.
"""

from __future__ import annotations

from typing import Any

import pytest

from app.acquisition.errors import ErrorKind, SourceError, TotalFailure
from app.acquisition.failure_log import FailureLog
from app.acquisition.orchestrator import FailoverOrchestrator
from app.acquisition.registry import AdapterRegistry
from app.domain.player_profile import SOLO_QUEUE, Identity, SourceName
from app.domain.source_failure import FailureRecord
from app.domain.source_results import (
    OpggResult,
    ScrapedMatchRow,
    ScrapedRankedRow,
    StaticDataResult,
)

from conftest import FakeResponse, FakeSession

ALL_PLAYER_SOURCES = (
    SourceName.RIOT_API,
    SourceName.OPGG,
    SourceName.MOBALYTICS,
    SourceName.LEAGUE_OF_GRAPHS,
)


class StubAdapter:
    """Returns ``result`` or raises ``error``; records every call."""

    def __init__(self, source_name: str, *, result: Any = None, error: SourceError | None = None) -> None:
        self.source_name = source_name
        self.result = result
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def fetch(self, identity: Identity, *, on_failure=None, deadline=None):
        self.calls.append({"identity": identity, "deadline": deadline})
        if self.error is not None:
            if on_failure is not None:
                on_failure(
                    FailureRecord(
                        source=self.source_name,
                        operation="SCRAPE_SUMMONER",
                        error_kind=self.error.kind.value,
                        message=str(self.error),
                        context={"attempt": 1},
                    )
                )
            raise self.error
        return self.result


def _not_found(source: str) -> SourceError:
    return SourceError(ErrorKind.NOT_FOUND, f"missing on {source}", status_code=404)


def _opgg_result(identity: Identity) -> OpggResult:
    return OpggResult(
        summoner_name=identity.summoner_name,
        tag_line=identity.tag_line,
        region=identity.region,
        level=120,
        source_url="https://op.gg",
        ranked=(ScrapedRankedRow(SOLO_QUEUE, "GOLD", "II", 40, 10, 10),),
        matches=(),
    )


def _static_result() -> StaticDataResult:
    return StaticDataResult(version="13.24.1", champions={"Ahri": {}}, items={})


def _stubs(identity: Identity, *, failing: tuple[str, ...] = (), static_fails: bool = False):
    stubs = {}
    for source in ALL_PLAYER_SOURCES:
        if source in failing:
            stubs[source] = StubAdapter(source, error=_not_found(source))
        else:
            stubs[source] = StubAdapter(source, result=_opgg_result(identity))
    stubs[SourceName.DATA_DRAGON] = (
        StubAdapter(SourceName.DATA_DRAGON, error=SourceError(ErrorKind.SERVER_ERROR, "cdn down"))
        if static_fails
        else StubAdapter(SourceName.DATA_DRAGON, result=_static_result())
    )
    return stubs


def _identity(preferred: str = "all", allow_riot: bool = False) -> Identity:
    return Identity(
        summoner_name="Hide on bush",
        tag_line="KR1",
        region="kr",
        preferred_source=preferred,
        allow_authenticated_source=allow_riot,
    )


@pytest.fixture()
def failure_log() -> FailureLog:
    return FailureLog()


# ---------------------------------------------------------------------------
# Attempt planning
# ---------------------------------------------------------------------------


class TestPlanAttempts:
    @pytest.mark.parametrize(
        "preferred, allow_riot, expected",
        [
            ("all", False, ["opgg", "mobalytics", "league_of_graphs"]),
            ("all", True, ["riot_api", "opgg", "mobalytics", "league_of_graphs"]),
            ("riot_api", True, ["riot_api"]),
            ("riot_api", False, []),
            ("mobalytics", False, ["mobalytics"]),
            ("mobalytics", True, ["mobalytics"]),
            ("league_of_graphs", True, ["league_of_graphs"]),
        ],
    )
    def test_plans(self, failure_log, preferred: str, allow_riot: bool, expected: list[str]) -> None:
        identity = _identity(preferred, allow_riot)
        orchestrator = FailoverOrchestrator(adapters=_stubs(identity), failure_log=failure_log)
        assert orchestrator.plan_attempts(identity) == expected

    def test_sources_without_adapter_are_skipped(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity)
        del stubs[SourceName.MOBALYTICS]
        orchestrator = FailoverOrchestrator(adapters=stubs, failure_log=failure_log)
        assert orchestrator.plan_attempts(identity) == ["opgg", "league_of_graphs"]


# ---------------------------------------------------------------------------
# Failover
# ---------------------------------------------------------------------------


class TestFailover:
    def test_first_success_stops_the_chain(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity)
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)

        assert outcome.successful_source == SourceName.OPGG
        assert outcome.degraded is False
        assert outcome.attempted_sources == (SourceName.OPGG,)
        assert outcome.failed_sources == ()
        assert len(stubs[SourceName.OPGG].calls) == 1
        assert stubs[SourceName.MOBALYTICS].calls == []
        assert stubs[SourceName.LEAGUE_OF_GRAPHS].calls == []
        assert stubs[SourceName.DATA_DRAGON].calls == []
        assert stubs[SourceName.RIOT_API].calls == []

    def test_failed_sources_recorded_in_attempt_order(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity, failing=(SourceName.OPGG,))
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)

        assert outcome.successful_source == SourceName.MOBALYTICS
        assert outcome.profile.failed_sources == (SourceName.OPGG,)
        assert SourceName.MOBALYTICS not in outcome.profile.failed_sources
        assert outcome.attempted_sources == (SourceName.OPGG, SourceName.MOBALYTICS)
        assert [record.source for record in outcome.failures] == [SourceName.OPGG]
        assert [record.source for record in failure_log.snapshot()] == [SourceName.OPGG]

    def test_successful_profile_is_analyzed(self, failure_log) -> None:
        identity = _identity()
        outcome = FailoverOrchestrator(adapters=_stubs(identity), failure_log=failure_log).acquire(identity)
        # GOLD 10-10 with no matches.
        assert outcome.profile.op_score == 70
        assert [insight.insight_type for insight in outcome.profile.insights] == ["general"]

    def test_authenticated_source_goes_first_when_allowed(self, failure_log) -> None:
        identity = _identity(allow_riot=True)
        stubs = _stubs(identity, failing=(SourceName.RIOT_API,))
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)
        assert outcome.attempted_sources == (SourceName.RIOT_API, SourceName.OPGG)
        assert outcome.failed_sources == (SourceName.RIOT_API,)

    def test_single_source_request_does_not_fall_through_to_other_player_sources(self, failure_log) -> None:
        identity = _identity("mobalytics", allow_riot=True)
        stubs = _stubs(identity, failing=(SourceName.MOBALYTICS,))
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)

        assert outcome.degraded is True
        assert outcome.attempted_sources == (SourceName.MOBALYTICS, SourceName.DATA_DRAGON)
        assert stubs[SourceName.RIOT_API].calls == []
        assert stubs[SourceName.OPGG].calls == []

    def test_riot_only_without_permission_goes_straight_to_static(self, failure_log) -> None:
        identity = _identity("riot_api", allow_riot=False)
        stubs = _stubs(identity)
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)
        assert outcome.successful_source == SourceName.DATA_DRAGON
        assert stubs[SourceName.RIOT_API].calls == []


# ---------------------------------------------------------------------------
# Static fallback and total failure
# ---------------------------------------------------------------------------


class TestFallback:
    def test_all_scraped_sources_fail_static_succeeds(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(
            identity,
            failing=(SourceName.OPGG, SourceName.MOBALYTICS, SourceName.LEAGUE_OF_GRAPHS),
        )
        outcome = FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)
        payload = outcome.profile.to_dict()

        assert outcome.degraded is True
        assert payload["dataSource"] == "data_dragon"
        assert payload["matches"] == []
        assert payload["failedSources"] == ["opgg", "mobalytics", "league_of_graphs"]
        assert len(payload["insights"]) == 1
        assert payload["insights"][0]["type"] == "error"
        assert payload["opScore"] == 0
        assert payload["summoner"]["name"] == "Hide on bush"
        assert payload["staticData"]["champions"] == {"Ahri": {}}

    def test_total_failure_lists_every_source(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(
            identity,
            failing=(SourceName.OPGG, SourceName.MOBALYTICS, SourceName.LEAGUE_OF_GRAPHS),
            static_fails=True,
        )
        with pytest.raises(TotalFailure) as excinfo:
            FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)

        failure = excinfo.value
        assert failure.failed_sources == (
            "opgg",
            "mobalytics",
            "league_of_graphs",
            "data_dragon",
        )
        assert failure.identity is identity
        assert len(failure.failures) == 4
        envelope = failure.to_envelope()
        assert envelope["summoner"] == {"name": "Hide on bush", "tagLine": "KR1"}
        assert envelope["failedSources"][-1] == "data_dragon"

    def test_missing_static_adapter_is_total_failure(self, failure_log) -> None:
        identity = _identity("opgg")
        stubs = _stubs(identity, failing=(SourceName.OPGG,))
        del stubs[SourceName.DATA_DRAGON]
        with pytest.raises(TotalFailure) as excinfo:
            FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)
        assert excinfo.value.failed_sources == ("opgg",)


# ---------------------------------------------------------------------------
# Deadlines
# ---------------------------------------------------------------------------


class TestDeadlines:
    def test_per_source_deadline_is_passed_to_adapters(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity, failing=(SourceName.OPGG,))
        orchestrator = FailoverOrchestrator(
            adapters=stubs,
            failure_log=failure_log,
            default_source_timeout_seconds=8.0,
            clock=lambda: 1000.0,
        )
        orchestrator.acquire(identity)
        assert stubs[SourceName.OPGG].calls[0]["deadline"] == 1008.0
        assert stubs[SourceName.MOBALYTICS].calls[0]["deadline"] == 1008.0

    def test_call_timeout_overrides_default(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity)
        orchestrator = FailoverOrchestrator(
            adapters=stubs,
            failure_log=failure_log,
            default_source_timeout_seconds=8.0,
            clock=lambda: 50.0,
        )
        orchestrator.acquire(identity, source_timeout_seconds=2.0)
        assert stubs[SourceName.OPGG].calls[0]["deadline"] == 52.0

    def test_no_timeout_means_no_deadline(self, failure_log) -> None:
        identity = _identity()
        stubs = _stubs(identity)
        FailoverOrchestrator(adapters=stubs, failure_log=failure_log).acquire(identity)
        assert stubs[SourceName.OPGG].calls[0]["deadline"] is None


# ---------------------------------------------------------------------------
# End to end over the real adapters
# ---------------------------------------------------------------------------


class TestWithRealAdapters:
    CHAMPION_URL = "https://ddragon.leagueoflegends.com/cdn/13.24.1/data/en_US/champion.json"
    ITEM_URL = "https://ddragon.leagueoflegends.com/cdn/13.24.1/data/en_US/item.json"

    def _orchestrator(self, context, session, retry_policy, failure_log) -> FailoverOrchestrator:
        adapters = AdapterRegistry().create_adapters(
            context=context, session=session, retry_policy=retry_policy
        )
        return FailoverOrchestrator(adapters=adapters, failure_log=failure_log)

    def test_not_found_everywhere_falls_back_to_static(
        self, context, retry_policy, sleeper, failure_log
    ) -> None:
        # Unscripted URLs answer 404.
        session = FakeSession(
            routes={
                self.CHAMPION_URL: FakeResponse(payload={"data": {"Ahri": {"key": "103"}}}),
                self.ITEM_URL: FakeResponse(payload={"data": {}}),
            }
        )
        identity = _identity()
        outcome = self._orchestrator(context, session, retry_policy, failure_log).acquire(identity)

        assert outcome.profile.data_source == SourceName.DATA_DRAGON
        assert outcome.failed_sources == ("opgg", "mobalytics", "league_of_graphs")
        assert [record.source for record in outcome.failures] == [
            "opgg",
            "mobalytics",
            "league_of_graphs",
        ]
        assert all(record.error_kind == "not_found" for record in outcome.failures)
        # NotFound is terminal: one request per scraped source, no waiting.
        assert len(session.calls) == 5
        assert sleeper.delays == []
        assert len(failure_log) == 3

    def test_everything_down_raises_total_failure(self, context, retry_policy, failure_log) -> None:
        session = FakeSession()
        with pytest.raises(TotalFailure) as excinfo:
            self._orchestrator(context, session, retry_policy, failure_log).acquire(_identity())
        assert excinfo.value.failed_sources == (
            "opgg",
            "mobalytics",
            "league_of_graphs",
            "data_dragon",
        )
