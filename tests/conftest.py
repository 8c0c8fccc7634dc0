"""
Shared fakes for the acquisition tests: a scripted HTTP session, a recording
sleeper, and an acquisition context built from the bundled source catalogue.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import pytest

from app.acquisition.config.loader import load_source_catalogue
from app.acquisition.config.models import AcquisitionContext, AcquisitionSettings
from app.acquisition.retry import RetryPolicy
from app.domain.player_profile import Identity

SOURCES_CONFIG = "app/acquisition/config/sources.json"


class FakeResponse:
    def __init__(
        self,
        status_code: int = 200,
        *,
        text: str = "",
        payload: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self._payload = payload
        self.text = text if payload is None else json.dumps(payload)

    def json(self) -> Any:
        return self._payload


@dataclass
class FakeSession:
    """
    Answers ``request`` from per-URL scripts. A script entry is a response, an
    exception instance to raise, or a list consumed one item per call.
    """

    routes: dict[str, Any] = field(default_factory=dict)
    calls: list[dict[str, Any]] = field(default_factory=list)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        script = self.routes.get(url)
        if script is None:
            return FakeResponse(404, text="not found")
        if isinstance(script, list):
            item = script.pop(0) if len(script) > 1 else script[0]
        else:
            item = script
        if isinstance(item, BaseException):
            raise item
        return item

    def calls_to(self, url: str) -> int:
        return sum(1 for call in self.calls if call["url"] == url)


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture()
def sleeper() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture()
def retry_policy(sleeper: RecordingSleep) -> RetryPolicy:
    return RetryPolicy(sleep=sleeper)


@pytest.fixture()
def make_context() -> Callable[..., AcquisitionContext]:
    def _build(*, riot_api_key: str | None = "RGAPI-test") -> AcquisitionContext:
        settings = AcquisitionSettings(
            config_path=SOURCES_CONFIG,
            user_agent="summoner-insight-tests",
            riot_api_key=riot_api_key,
            retry_jitter_seconds=0.0,
        )
        return AcquisitionContext(
            settings=settings,
            catalogue=load_source_catalogue(config_path=SOURCES_CONFIG),
        )

    return _build


@pytest.fixture()
def context(make_context: Callable[..., AcquisitionContext]) -> AcquisitionContext:
    return make_context()


@pytest.fixture()
def identity() -> Identity:
    return Identity(summoner_name="Hide on bush", tag_line="KR1", region="kr")
