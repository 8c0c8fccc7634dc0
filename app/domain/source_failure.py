"""
app/domain/source_failure.py

Audit records for failed source attempts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True)
class FailureRecord:
    """
    One failed attempt against one source.
    """

    source: str
    operation: str
    error_kind: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    context: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "operation": self.operation,
            "errorKind": self.error_kind,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context,
        }
