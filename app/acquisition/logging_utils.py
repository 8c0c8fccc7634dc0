"""
Structured logging helpers for source acquisition.
"""

from __future__ import annotations

import json
import logging
import os
from enum import Enum
from typing import Any

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.

    Enum members are logged by value so error kinds read the same in logs and
    in persisted failure records.
    """

    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **{key: _plain(value) for key, value in fields.items()}}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def configure_logging(level_name: str | None = None) -> None:
    """
    Configure root logging once for the process.
    """

    raw_level = level_name or os.getenv("LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=getattr(logging, raw_level.strip().upper(), logging.INFO),
        format=_LOG_FORMAT,
    )


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (tuple, frozenset, set)):
        return list(value)
    return value
