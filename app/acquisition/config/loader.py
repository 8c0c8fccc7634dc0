"""
Environment + JSON config loader for the source catalogue.
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

from app.acquisition.config.models import (
    AcquisitionContext,
    AcquisitionSettings,
    SourceCatalogue,
    SourceConfig,
    SourceKind,
)
from app.config import (
    get_float_env,
    get_optional_float_env,
    get_optional_str_env,
    get_str_env,
)

_DEFAULT_CONFIG_PATH = "app/acquisition/config/sources.json"
_DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; SummonerInsight/1.0)"


def _project_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _resolve_config_path(raw_path: str) -> Path:
    candidate = Path(raw_path)
    if candidate.is_absolute():
        return candidate
    return (_project_root() / candidate).resolve()


@lru_cache(maxsize=1)
def get_acquisition_settings() -> AcquisitionSettings:
    """
    Return cached acquisition settings from environment variables.
    """

    timeout = get_optional_float_env("SUMMONER_SOURCE_TIMEOUT_SECONDS")
    return AcquisitionSettings(
        config_path=str(
            _resolve_config_path(get_str_env("SUMMONER_SOURCES_CONFIG_PATH", _DEFAULT_CONFIG_PATH))
        ),
        user_agent=get_str_env("SUMMONER_HTTP_USER_AGENT", _DEFAULT_USER_AGENT),
        riot_api_key=get_optional_str_env("RIOT_API_KEY"),
        retry_jitter_seconds=max(0.0, get_float_env("SUMMONER_RETRY_JITTER_SECONDS", 0.5)),
        source_timeout_seconds=timeout if timeout is not None and timeout > 0 else None,
    )


@lru_cache(maxsize=4)
def get_source_catalogue(config_path: str) -> SourceCatalogue:
    return load_source_catalogue(config_path=config_path)


def build_acquisition_context(settings: AcquisitionSettings | None = None) -> AcquisitionContext:
    resolved = settings or get_acquisition_settings()
    return AcquisitionContext(
        settings=resolved,
        catalogue=get_source_catalogue(resolved.config_path),
    )


def load_source_catalogue(*, config_path: str) -> SourceCatalogue:
    """
    Load the source catalogue from a JSON file.
    """

    path = _resolve_config_path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Source config file not found: {path}")

    raw_data = json.loads(path.read_text(encoding="utf-8"))
    return parse_source_catalogue(raw_data)


def parse_source_catalogue(raw_data: object) -> SourceCatalogue:
    if not isinstance(raw_data, dict):
        raise ValueError("Invalid source config: top level must be an object.")

    entries = raw_data.get("sources", [])
    if not isinstance(entries, list):
        raise ValueError("Invalid source config: 'sources' must be a list.")

    sources: dict[str, SourceConfig] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue

        name = str(entry.get("name", "")).strip().lower()
        url_template = str(entry.get("url_template", "")).strip()
        if not name or not url_template:
            continue

        kind = str(entry.get("kind", SourceKind.SCRAPE)).strip().lower()
        if kind not in SourceKind.ALL:
            raise ValueError(
                f"Unknown kind='{kind}' for source='{name}'. "
                f"Allowed kinds: {', '.join(sorted(SourceKind.ALL))}."
            )

        sources[name] = SourceConfig(
            name=name,
            kind=kind,
            url_template=url_template,
            region_map=_normalize_str_map(entry.get("region_map"), lower_keys=True),
            headers=_normalize_str_map(entry.get("headers")),
            timeout_seconds=max(1.0, _float_or(entry.get("timeout_seconds"), 15.0)),
            max_attempts=max(1, _int_or(entry.get("max_attempts"), 3)),
            base_delay_seconds=max(0.0, _float_or(entry.get("base_delay_seconds"), 1.0)),
            selector_version=str(entry.get("selector_version", "1")).strip() or "1",
            selectors=_normalize_selectors(entry.get("selectors", {})),
            not_found_markers=_normalize_markers(entry.get("not_found_markers")),
            platform_hosts=_normalize_str_map(entry.get("platform_hosts"), lower_keys=True),
            cluster_hosts=_normalize_str_map(entry.get("cluster_hosts"), lower_keys=True),
            cluster_map=_normalize_str_map(entry.get("cluster_map"), lower_keys=True),
            match_count=max(1, _int_or(entry.get("match_count"), 10)),
            static_version=_optional_str(entry.get("version")),
            static_locale=_optional_str(entry.get("locale")) or "en_US",
        )

    return SourceCatalogue(
        version=str(raw_data.get("version", "1")).strip() or "1",
        sources=sources,
    )


def _normalize_selectors(selectors: object) -> dict[str, list[str]]:
    if not isinstance(selectors, dict):
        return {}

    normalized: dict[str, list[str]] = {}
    for key, value in selectors.items():
        if not isinstance(key, str):
            continue
        if isinstance(value, str):
            selector_list = [value.strip()] if value.strip() else []
        elif isinstance(value, list):
            selector_list = [
                item.strip()
                for item in value
                if isinstance(item, str) and item.strip()
            ]
        else:
            selector_list = []
        normalized[key.strip().lower()] = selector_list
    return normalized


def _normalize_str_map(value: object, *, lower_keys: bool = False) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}

    normalized: dict[str, str] = {}
    for key, item in value.items():
        if not isinstance(key, str) or not isinstance(item, str):
            continue
        if key.strip() and item.strip():
            normalized_key = key.strip().lower() if lower_keys else key.strip()
            normalized[normalized_key] = item.strip()
    return normalized


def _normalize_markers(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return ()
    return tuple(item.strip() for item in value if isinstance(item, str) and item.strip())


def _optional_str(value: object) -> str | None:
    if value is None or not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _optional_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _float_or(value: Any, default: float) -> float:
    parsed = _optional_float(value)
    return default if parsed is None else parsed


def _int_or(value: Any, default: int) -> int:
    parsed = _optional_int(value)
    return default if parsed is None else parsed
