"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def get_float_env(name: str, default: float) -> float:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def get_int_env(name: str, default: int, *, minimum: int | None = None) -> int:
    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value.strip())
    except ValueError:
        return default
    if minimum is not None and value < minimum:
        return default
    return value


def get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables; blank values fall back to default.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def get_optional_str_env(name: str) -> str | None:
    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


def get_optional_float_env(name: str) -> float | None:
    raw_value = get_optional_str_env(name)
    if raw_value is None:
        return None
    try:
        return float(raw_value)
    except ValueError:
        return None


@dataclass(frozen=True)
class PersistenceSettings:
    """
    Controls whether lookups are written to the database after responding.
    """

    enabled: bool = True


@lru_cache(maxsize=1)
def get_persistence_settings() -> PersistenceSettings:
    return PersistenceSettings(
        enabled=get_bool_env("SUMMONER_PERSISTENCE_ENABLED", True),
    )


@dataclass(frozen=True)
class FailureLogSettings:
    max_records: int = 1000


@lru_cache(maxsize=1)
def get_failure_log_settings() -> FailureLogSettings:
    return FailureLogSettings(
        max_records=get_int_env("SUMMONER_FAILURE_LOG_MAX_RECORDS", 1000, minimum=1),
    )
