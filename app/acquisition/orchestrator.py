"""
app/acquisition/orchestrator.py

Priority-ordered failover across player-data sources.

Sources are tried one at a time; the first success wins and no later source
is invoked. When every player source fails, the static reference data
fallback produces a degraded profile. When that fails too, ``TotalFailure``
is raised carrying every attempted source.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum

from analytics.engine import AnalyticsEngine
from app.acquisition.adapters import SourceAdapter
from app.acquisition.errors import SourceError, TotalFailure
from app.acquisition.failure_log import FailureLog, get_failure_log
from app.acquisition.logging_utils import log_event
from app.acquisition.normalizer import ProfileNormalizer
from app.domain.player_profile import (
    ALL_SOURCES,
    SCRAPED_SOURCE_PRIORITY,
    CanonicalProfile,
    Identity,
    SourceName,
)
from app.domain.source_failure import FailureRecord

logger = logging.getLogger(__name__)


class AcquisitionState(str, Enum):
    INIT = "init"
    TRYING = "trying"
    NORMALIZE = "normalize"
    ALL_EXHAUSTED = "all_exhausted"
    STATIC_FALLBACK = "static_fallback"
    DONE = "done"
    DONE_DEGRADED = "done_degraded"
    TOTAL_FAILURE = "total_failure"


@dataclass(frozen=True)
class AcquisitionOutcome:
    """
    Result of one acquisition request.
    """

    profile: CanonicalProfile
    degraded: bool
    attempted_sources: tuple[str, ...]
    successful_source: str
    failures: tuple[FailureRecord, ...] = ()

    @property
    def failed_sources(self) -> tuple[str, ...]:
        return self.profile.failed_sources


class FailoverOrchestrator:
    """
    Drives source adapters in priority order.

    Adapters, normalizer, analytics, and the failure log are all supplied at
    construction; the orchestrator holds no per-request state between calls.
    """

    def __init__(
        self,
        *,
        adapters: Mapping[str, SourceAdapter],
        normalizer: ProfileNormalizer | None = None,
        analytics: AnalyticsEngine | None = None,
        failure_log: FailureLog | None = None,
        static_source: str = SourceName.DATA_DRAGON,
        default_source_timeout_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._adapters = dict(adapters)
        self._normalizer = normalizer or ProfileNormalizer()
        self._analytics = analytics or AnalyticsEngine()
        self._failure_log = failure_log if failure_log is not None else get_failure_log()
        self._static_source = static_source
        self._default_source_timeout_seconds = default_source_timeout_seconds
        self._clock = clock

    def plan_attempts(self, identity: Identity) -> list[str]:
        """
        Ordered player-source list for ``identity``, static fallback excluded.

        A request naming one scraped source gets only that source, even when
        the authenticated source is allowed.
        """

        preferred = identity.preferred_source
        if preferred == ALL_SOURCES:
            planned = [SourceName.RIOT_API] if identity.allow_authenticated_source else []
            planned.extend(SCRAPED_SOURCE_PRIORITY)
        elif preferred == SourceName.RIOT_API:
            planned = [SourceName.RIOT_API] if identity.allow_authenticated_source else []
        else:
            planned = [preferred]

        attempts: list[str] = []
        for source in planned:
            if source not in self._adapters:
                log_event(
                    logger,
                    logging.WARNING,
                    "source_skipped_no_adapter",
                    source=source,
                    summoner=identity.display_name,
                )
                continue
            attempts.append(source)
        return attempts

    def acquire(
        self,
        identity: Identity,
        *,
        source_timeout_seconds: float | None = None,
    ) -> AcquisitionOutcome:
        """
        Run the failover chain for ``identity``.

        Raises:
            TotalFailure: every player source and the static fallback failed.
        """

        timeout = (
            source_timeout_seconds
            if source_timeout_seconds is not None
            else self._default_source_timeout_seconds
        )
        failures: list[FailureRecord] = []
        attempted: list[str] = []
        failed: list[str] = []

        def record_failure(record: FailureRecord) -> None:
            failures.append(record)
            self._failure_log.append(record)

        self._transition(AcquisitionState.INIT, identity)
        for index, source in enumerate(self.plan_attempts(identity)):
            attempted.append(source)
            self._transition(AcquisitionState.TRYING, identity, source=source, position=index)
            try:
                result = self._adapters[source].fetch(
                    identity,
                    on_failure=record_failure,
                    deadline=self._deadline(timeout),
                )
            except SourceError as exc:
                failed.append(source)
                log_event(
                    logger,
                    logging.WARNING,
                    "source_failed",
                    source=source,
                    summoner=identity.display_name,
                    error_kind=exc.kind,
                    error=str(exc),
                )
                continue

            self._transition(AcquisitionState.NORMALIZE, identity, source=source)
            profile = self._analytics.analyze(self._normalizer.normalize(result, identity))
            profile = dataclasses.replace(profile, failed_sources=tuple(failed))
            self._transition(AcquisitionState.DONE, identity, source=source, failed_sources=failed)
            return AcquisitionOutcome(
                profile=profile,
                degraded=False,
                attempted_sources=tuple(attempted),
                successful_source=source,
                failures=tuple(failures),
            )

        self._transition(AcquisitionState.ALL_EXHAUSTED, identity, failed_sources=failed)
        static_adapter = self._adapters.get(self._static_source)
        if static_adapter is not None:
            attempted.append(self._static_source)
            self._transition(AcquisitionState.STATIC_FALLBACK, identity, source=self._static_source)
            try:
                result = static_adapter.fetch(
                    identity,
                    on_failure=record_failure,
                    deadline=self._deadline(timeout),
                )
            except SourceError as exc:
                failed.append(self._static_source)
                log_event(
                    logger,
                    logging.ERROR,
                    "static_fallback_failed",
                    summoner=identity.display_name,
                    error_kind=exc.kind,
                    error=str(exc),
                )
            else:
                profile = dataclasses.replace(
                    self._normalizer.normalize(result, identity),
                    failed_sources=tuple(failed),
                )
                self._transition(
                    AcquisitionState.DONE_DEGRADED,
                    identity,
                    source=self._static_source,
                    failed_sources=failed,
                )
                return AcquisitionOutcome(
                    profile=profile,
                    degraded=True,
                    attempted_sources=tuple(attempted),
                    successful_source=self._static_source,
                    failures=tuple(failures),
                )
        else:
            log_event(
                logger,
                logging.ERROR,
                "static_fallback_unavailable",
                summoner=identity.display_name,
            )

        self._transition(AcquisitionState.TOTAL_FAILURE, identity, failed_sources=failed)
        raise TotalFailure(identity=identity, failed_sources=failed, failures=failures)

    def _deadline(self, timeout: float | None) -> float | None:
        if timeout is None or timeout <= 0:
            return None
        return self._clock() + timeout

    @staticmethod
    def _transition(state: AcquisitionState, identity: Identity, **fields: object) -> None:
        level = logging.ERROR if state is AcquisitionState.TOTAL_FAILURE else logging.INFO
        log_event(
            logger,
            level,
            "acquisition_state",
            state=state,
            summoner=identity.display_name,
            region=identity.region,
            **fields,
        )
