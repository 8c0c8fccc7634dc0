"""
Static reference data fallback (Riot Data Dragon CDN).
"""

from __future__ import annotations

from typing import Any

from app.acquisition.adapters.base import FetchScope, SourceAdapter
from app.acquisition.errors import ParseFailure
from app.domain.player_profile import SourceName
from app.domain.source_results import StaticDataResult

DEFAULT_STATIC_VERSION = "13.24.1"


class DataDragonAdapter(SourceAdapter):
    """
    Last-resort source. Returns game-wide champion and item data only; a
    profile built from it is always degraded.
    """

    source_name = SourceName.DATA_DRAGON
    degraded = True

    @property
    def version(self) -> str:
        return self.config.static_version or DEFAULT_STATIC_VERSION

    def dataset_url(self, dataset: str) -> str:
        return self.config.url_template.format(
            version=self.version,
            locale=self.config.static_locale,
            dataset=dataset,
        )

    def _fetch(self, scope: FetchScope) -> StaticDataResult:
        return StaticDataResult(
            version=self.version,
            champions=self._load_dataset(scope, "champion"),
            items=self._load_dataset(scope, "item"),
        )

    def _load_dataset(self, scope: FetchScope, dataset: str) -> dict[str, Any]:
        url = self.dataset_url(dataset)

        def load() -> dict[str, Any]:
            payload = self._get(scope, url).json()
            data = payload.get("data") if isinstance(payload, dict) else None
            if not isinstance(data, dict):
                raise ParseFailure(f"Data Dragon {dataset} payload has no 'data' mapping")
            return data

        return self._call(scope, "FETCH_STATIC_DATA", load, url=url, dataset=dataset)
