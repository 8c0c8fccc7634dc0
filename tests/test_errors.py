"""
tests/test_errors.py

Failure taxonomy: status classification, Retry-After parsing, exception
mapping, and the total-failure response envelope.
"""

from __future__ import annotations

import pytest
import requests
from pydantic import BaseModel, ValidationError

from app.acquisition.errors import (
    ErrorKind,
    ParseFailure,
    SourceError,
    TotalFailure,
    classify_exception,
    classify_status,
    error_from_status,
    parse_retry_after,
)
from app.domain.player_profile import Identity


@pytest.mark.parametrize(
    "status_code, expected",
    [
        (200, None),
        (302, None),
        (400, ErrorKind.CLIENT_ERROR),
        (401, ErrorKind.CLIENT_ERROR),
        (403, ErrorKind.CLIENT_ERROR),
        (404, ErrorKind.NOT_FOUND),
        (429, ErrorKind.RATE_LIMITED),
        (500, ErrorKind.SERVER_ERROR),
        (503, ErrorKind.SERVER_ERROR),
    ],
)
def test_classify_status(status_code: int, expected: ErrorKind | None) -> None:
    assert classify_status(status_code) is expected


@pytest.mark.parametrize(
    "raw, expected",
    [(None, None), ("3", 3.0), (" 1.5 ", 1.5), ("soon", None), ("-2", None)],
)
def test_parse_retry_after(raw: str | None, expected: float | None) -> None:
    assert parse_retry_after(raw) == expected


def test_error_from_status_reads_retry_after_for_rate_limits() -> None:
    error = error_from_status(429, url="https://example.test", headers={"Retry-After": "4"})
    assert error is not None
    assert error.kind is ErrorKind.RATE_LIMITED
    assert error.retry_after == 4.0
    assert error.status_code == 429


def test_error_from_status_ignores_retry_after_on_other_errors() -> None:
    error = error_from_status(503, url="https://example.test", headers={"Retry-After": "4"})
    assert error is not None
    assert error.retry_after is None


def test_error_from_status_success_is_none() -> None:
    assert error_from_status(200, url="https://example.test") is None


def test_terminal_flag() -> None:
    assert SourceError(ErrorKind.NOT_FOUND, "x").is_terminal
    assert ParseFailure("x").is_terminal
    assert not SourceError(ErrorKind.TIMEOUT, "x").is_terminal
    assert not SourceError(ErrorKind.RATE_LIMITED, "x").is_terminal


class TestClassifyException:
    def test_source_error_passes_through(self) -> None:
        error = SourceError(ErrorKind.SERVER_ERROR, "boom")
        assert classify_exception(error) is error

    def test_timeout(self) -> None:
        assert classify_exception(requests.Timeout("slow")).kind is ErrorKind.TIMEOUT

    def test_connection_error(self) -> None:
        assert classify_exception(requests.ConnectionError("refused")).kind is ErrorKind.NETWORK_ERROR

    def test_validation_error_is_parse_failure(self) -> None:
        class Payload(BaseModel):
            puuid: str

        with pytest.raises(ValidationError) as excinfo:
            Payload.model_validate({})
        classified = classify_exception(excinfo.value)
        assert isinstance(classified, ParseFailure)
        assert classified.kind is ErrorKind.PARSE_FAILURE

    def test_unrelated_exception_is_not_classified(self) -> None:
        assert classify_exception(ZeroDivisionError()) is None


def test_total_failure_envelope() -> None:
    identity = Identity(summoner_name="Faker", tag_line="KR1", region="kr")
    failure = TotalFailure(
        identity=identity,
        failed_sources=["opgg", "mobalytics", "league_of_graphs", "data_dragon"],
    )
    assert failure.to_envelope() == {
        "error": "All data sources unavailable",
        "details": "Unable to retrieve data from any source. Please try again later.",
        "failedSources": ["opgg", "mobalytics", "league_of_graphs", "data_dragon"],
        "summoner": {"name": "Faker", "tagLine": "KR1"},
    }
    assert "Faker#KR1" in str(failure)
