"""
app/acquisition/errors.py

Failure taxonomy shared by the retry policy, the adapters, and the orchestrator.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

import requests
from pydantic import ValidationError

if TYPE_CHECKING:
    from app.domain.player_profile import Identity
    from app.domain.source_failure import FailureRecord


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TIMEOUT = "timeout"
    NETWORK_ERROR = "network_error"
    SERVER_ERROR = "server_error"
    PARSE_FAILURE = "parse_failure"
    CLIENT_ERROR = "client_error"


# Retrying these reproduces the same outcome.
TERMINAL_KINDS = frozenset(
    {ErrorKind.NOT_FOUND, ErrorKind.CLIENT_ERROR, ErrorKind.PARSE_FAILURE}
)


class SourceError(RuntimeError):
    """
    Raised when one source cannot produce a result.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        status_code: int | None = None,
        retry_after: float | None = None,
    ) -> None:
        self.kind = kind
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(message)

    @property
    def is_terminal(self) -> bool:
        return self.kind in TERMINAL_KINDS


class ParseFailure(SourceError):
    """
    Raised when a fetched payload cannot be mapped to the minimal profile shape.
    """

    def __init__(self, message: str) -> None:
        super().__init__(ErrorKind.PARSE_FAILURE, message)


class TotalFailure(RuntimeError):
    """
    Raised when every source, the static fallback included, has failed.
    """

    def __init__(
        self,
        *,
        identity: "Identity",
        failed_sources: Sequence[str],
        failures: Sequence["FailureRecord"] = (),
    ) -> None:
        self.identity = identity
        self.failed_sources = tuple(failed_sources)
        self.failures = tuple(failures)
        super().__init__(
            f"All data sources failed for {identity.display_name}: "
            f"{', '.join(self.failed_sources) or 'none attempted'}"
        )

    def to_envelope(self) -> dict[str, Any]:
        return {
            "error": "All data sources unavailable",
            "details": "Unable to retrieve data from any source. Please try again later.",
            "failedSources": list(self.failed_sources),
            "summoner": {
                "name": self.identity.summoner_name,
                "tagLine": self.identity.tag_line,
            },
        }


def parse_retry_after(value: str | None) -> float | None:
    """
    Read a Retry-After header expressed in seconds.
    """

    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except (TypeError, ValueError):
        return None
    return seconds if seconds >= 0 else None


def classify_status(status_code: int) -> ErrorKind | None:
    if status_code == 404:
        return ErrorKind.NOT_FOUND
    if status_code == 429:
        return ErrorKind.RATE_LIMITED
    if 400 <= status_code < 500:
        return ErrorKind.CLIENT_ERROR
    if status_code >= 500:
        return ErrorKind.SERVER_ERROR
    return None


def error_from_status(
    status_code: int,
    *,
    url: str,
    headers: Mapping[str, str] | None = None,
) -> SourceError | None:
    """
    Build the error for a non-success HTTP status, or None for success codes.
    """

    kind = classify_status(status_code)
    if kind is None:
        return None
    retry_after = None
    if kind is ErrorKind.RATE_LIMITED and headers is not None:
        retry_after = parse_retry_after(headers.get("Retry-After"))
    return SourceError(
        kind,
        f"HTTP {status_code} from {url}",
        status_code=status_code,
        retry_after=retry_after,
    )


def classify_exception(exc: BaseException) -> SourceError | None:
    """
    Map a raised exception onto the failure taxonomy.

    Returns None for exceptions that are not source failures; callers must
    re-raise those unchanged.
    """

    if isinstance(exc, SourceError):
        return exc
    if isinstance(exc, requests.Timeout):
        return SourceError(ErrorKind.TIMEOUT, f"Request timed out: {exc}")
    if isinstance(exc, requests.ConnectionError):
        return SourceError(ErrorKind.NETWORK_ERROR, f"Connection failed: {exc}")
    if isinstance(exc, requests.HTTPError):
        status_code = exc.response.status_code if exc.response is not None else None
        if status_code is not None:
            classified = error_from_status(
                status_code,
                url=exc.response.url if exc.response is not None else "",
                headers=exc.response.headers if exc.response is not None else None,
            )
            if classified is not None:
                return classified
        return SourceError(ErrorKind.SERVER_ERROR, str(exc), status_code=status_code)
    if isinstance(exc, requests.exceptions.JSONDecodeError):
        return ParseFailure(f"Response was not valid JSON: {exc}")
    if isinstance(exc, ValidationError):
        return ParseFailure(f"Response did not match the expected shape: {exc.error_count()} error(s)")
    if isinstance(exc, requests.RequestException):
        return SourceError(ErrorKind.NETWORK_ERROR, f"Request failed: {exc}")
    return None
