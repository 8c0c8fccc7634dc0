"""
Storage layer interfaces for acquisition outcomes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.acquisition.errors import TotalFailure
    from app.acquisition.orchestrator import AcquisitionOutcome


class ProfileStorage(ABC):
    """
    Storage abstraction for profile upserts and source audit rows.
    """

    @abstractmethod
    def store_outcome(self, outcome: "AcquisitionOutcome") -> str:
        """
        Upsert the profile, record failures and the fallback path; return the profile id.
        """

    @abstractmethod
    def store_degraded_outcome(self, outcome: "AcquisitionOutcome") -> None:
        """
        Record the failures and fallback path of a static-data outcome.

        Any previously stored profile and its insights stay untouched.
        """

    @abstractmethod
    def store_total_failure(self, failure: "TotalFailure") -> None:
        """
        Record the failures and fallback path of a request that produced no profile.
        """
