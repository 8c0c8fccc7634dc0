"""
app/acquisition/adapters/base.py

Base source adapter abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar
from urllib.parse import quote

import requests

from app.acquisition.config.models import AcquisitionContext
from app.acquisition.errors import ErrorKind, SourceError, error_from_status
from app.acquisition.logging_utils import log_event
from app.acquisition.retry import RetryPolicy
from app.domain.player_profile import Identity
from app.domain.source_failure import FailureRecord
from app.domain.source_results import SourceResult

logger = logging.getLogger(__name__)

T = TypeVar("T")

FailureSink = Callable[[FailureRecord], None]


def encode_slug(summoner_name: str, tag_line: str, *, lowercase: bool = False) -> str:
    """
    Build the ``name-tag`` path segment with every reserved character escaped.
    """

    slug = f"{summoner_name}-{tag_line}"
    if lowercase:
        slug = slug.lower()
    return quote(slug, safe="")


@dataclass(frozen=True)
class FetchScope:
    """
    Per-call state threaded through one adapter fetch.
    """

    identity: Identity
    deadline: float | None = None
    on_failure: FailureSink | None = None


class SourceAdapter(ABC):
    """
    Fetches and loosely parses one source's view of a player.

    Every HTTP operation runs through the shared ``RetryPolicy``; each failed
    attempt becomes a ``FailureRecord`` handed to the caller's sink.
    """

    source_name: ClassVar[str]
    degraded: ClassVar[bool] = False

    def __init__(
        self,
        *,
        context: AcquisitionContext,
        session: requests.Session | None = None,
        retry_policy: RetryPolicy | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self.config = context.source(self.source_name)
        self.session = session or requests.Session()
        self.retry_policy = retry_policy or RetryPolicy()
        self._clock = clock
        self.retry_settings = self.config.retry_settings(
            jitter_seconds=context.settings.retry_jitter_seconds
        )
        self.request_headers = {"User-Agent": context.settings.user_agent, **self.config.headers}

    def fetch(
        self,
        identity: Identity,
        *,
        on_failure: FailureSink | None = None,
        deadline: float | None = None,
    ) -> SourceResult:
        """
        Return this source's result for ``identity`` or raise ``SourceError``.
        """

        scope = FetchScope(identity=identity, deadline=deadline, on_failure=on_failure)
        result = self._fetch(scope)
        log_event(
            logger,
            logging.INFO,
            "source_fetched",
            source=self.source_name,
            summoner=identity.display_name,
            region=identity.region,
        )
        return result

    @abstractmethod
    def _fetch(self, scope: FetchScope) -> SourceResult:
        """
        Fetch and parse this source's representation of the player.
        """

    def _call(
        self,
        scope: FetchScope,
        operation_name: str,
        operation: Callable[[], T],
        **context: Any,
    ) -> T:
        """
        Run one retried operation, reporting every failed attempt.
        """

        reported: set[int] = set()

        def report(error: SourceError, attempt: int | None) -> None:
            reported.add(id(error))
            record = FailureRecord(
                source=self.source_name,
                operation=operation_name,
                error_kind=error.kind.value,
                message=str(error),
                context={
                    "summoner": scope.identity.display_name,
                    "region": scope.identity.region,
                    "attempt": attempt,
                    "status_code": error.status_code,
                    **context,
                },
            )
            log_event(
                logger,
                logging.WARNING,
                "source_attempt_failed",
                source=self.source_name,
                operation=operation_name,
                error_kind=error.kind,
                attempt=attempt,
                error=str(error),
            )
            if scope.on_failure is not None:
                scope.on_failure(record)

        try:
            return self.retry_policy.execute(
                operation,
                settings=self.retry_settings,
                on_failure=report,
                deadline=scope.deadline,
                label=f"{self.source_name}.{operation_name}",
            )
        except SourceError as exc:
            # Deadline expiry is raised without an attempt of its own.
            if id(exc) not in reported:
                report(exc, None)
            raise

    def _request_timeout(self, scope: FetchScope) -> float:
        timeout = self.config.timeout_seconds
        if scope.deadline is None:
            return timeout
        remaining = scope.deadline - self._clock()
        if remaining <= 0:
            raise SourceError(ErrorKind.TIMEOUT, f"{self.source_name}: source deadline reached")
        return min(timeout, remaining)

    def _get(
        self,
        scope: FetchScope,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Issue one GET and raise the classified error for non-success statuses.
        """

        response = self.session.request(
            method="GET",
            url=url,
            params=params,
            headers={**self.request_headers, **(headers or {})},
            timeout=self._request_timeout(scope),
            allow_redirects=True,
        )
        error = error_from_status(response.status_code, url=url, headers=response.headers)
        if error is not None:
            raise error
        return response
