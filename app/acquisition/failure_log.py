"""
Process-wide log of recent failed source attempts.
"""

from __future__ import annotations

import threading
from collections import deque
from functools import lru_cache

from app.config import get_failure_log_settings
from app.domain.source_failure import FailureRecord


class FailureLog:
    """
    Thread-safe record store shared across requests.

    Only the newest ``max_records`` entries are kept; older ones are dropped as
    new failures arrive.
    """

    def __init__(self, max_records: int = 1000) -> None:
        if max_records < 1:
            raise ValueError("max_records must be >= 1")
        self._records: deque[FailureRecord] = deque(maxlen=max_records)
        self._lock = threading.Lock()

    @property
    def max_records(self) -> int:
        return self._records.maxlen or 0

    def append(self, record: FailureRecord) -> None:
        with self._lock:
            self._records.append(record)

    def snapshot(self) -> tuple[FailureRecord, ...]:
        with self._lock:
            return tuple(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


@lru_cache(maxsize=1)
def get_failure_log() -> FailureLog:
    return FailureLog(max_records=get_failure_log_settings().max_records)
