"""
Source catalogue configuration models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.acquisition.retry import RetrySettings


class SourceKind:
    SCRAPE = "scrape"
    API = "api"
    STATIC = "static"

    ALL = frozenset({SCRAPE, API, STATIC})


@dataclass(frozen=True)
class SourceConfig:
    """
    Endpoint templates, retry budget, and extraction rules for one source.
    """

    name: str
    kind: str
    url_template: str
    region_map: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    timeout_seconds: float = 15.0
    max_attempts: int = 3
    base_delay_seconds: float = 1.0
    selector_version: str = "1"
    selectors: dict[str, list[str]] = field(default_factory=dict)
    not_found_markers: tuple[str, ...] = ()
    # Riot API only.
    platform_hosts: dict[str, str] = field(default_factory=dict)
    cluster_hosts: dict[str, str] = field(default_factory=dict)
    cluster_map: dict[str, str] = field(default_factory=dict)
    match_count: int = 10
    # Static data only.
    static_version: str | None = None
    static_locale: str = "en_US"

    def region_code(self, region: str) -> str:
        return self.region_map.get(region.strip().lower(), region.strip().lower())

    def selectors_for(self, field_name: str) -> list[str]:
        return self.selectors.get(field_name.strip().lower(), [])

    def retry_settings(self, *, jitter_seconds: float) -> RetrySettings:
        return RetrySettings(
            max_attempts=self.max_attempts,
            base_delay_seconds=self.base_delay_seconds,
            jitter_seconds=jitter_seconds,
        )


@dataclass(frozen=True)
class SourceCatalogue:
    """
    Immutable set of configured sources keyed by source name.
    """

    version: str
    sources: dict[str, SourceConfig]

    def get(self, name: str) -> SourceConfig:
        config = self.sources.get(name)
        if config is None:
            allowed = ", ".join(sorted(self.sources))
            raise KeyError(f"Source '{name}' is not configured. Configured sources: {allowed}.")
        return config

    def __contains__(self, name: object) -> bool:
        return name in self.sources


@dataclass(frozen=True)
class AcquisitionSettings:
    """
    Runtime settings for source acquisition.
    """

    config_path: str
    user_agent: str
    riot_api_key: str | None = None
    retry_jitter_seconds: float = 0.5
    source_timeout_seconds: float | None = None


@dataclass(frozen=True)
class AcquisitionContext:
    """
    Everything an adapter or the orchestrator needs, passed in at construction.
    """

    settings: AcquisitionSettings
    catalogue: SourceCatalogue

    def source(self, name: str) -> SourceConfig:
        return self.catalogue.get(name)
