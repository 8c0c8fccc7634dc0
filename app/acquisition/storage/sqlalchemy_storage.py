"""
SQLAlchemy-backed storage implementation for acquisition outcomes.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.acquisition.storage.base import ProfileStorage
from app.repositories.summoner_profile_repository import SummonerProfileRepository
from db.session import session_scope

if TYPE_CHECKING:
    from app.acquisition.errors import TotalFailure
    from app.acquisition.orchestrator import AcquisitionOutcome


class SQLAlchemyProfileStorage(ProfileStorage):
    """
    Persist outcomes through the repository and DB session.
    """

    def __init__(self, *, session: Session) -> None:
        self._session = session

    def store_outcome(self, outcome: "AcquisitionOutcome") -> str:
        repository = SummonerProfileRepository(self._session)
        try:
            profile_id = repository.upsert_profile(outcome.profile, degraded=outcome.degraded)
            repository.record_failures(profile_id, outcome.failures)
            repository.record_fallback(
                profile_id,
                attempted_sources=outcome.attempted_sources,
                successful_source=outcome.successful_source,
                degraded=outcome.degraded,
            )
            self._session.commit()
            return profile_id
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def store_degraded_outcome(self, outcome: "AcquisitionOutcome") -> None:
        repository = SummonerProfileRepository(self._session)
        profile_id = outcome.profile.summoner.id
        try:
            repository.record_failures(profile_id, outcome.failures)
            repository.record_fallback(
                profile_id,
                attempted_sources=outcome.attempted_sources,
                successful_source=outcome.successful_source,
                degraded=True,
            )
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise

    def store_total_failure(self, failure: "TotalFailure") -> None:
        repository = SummonerProfileRepository(self._session)
        profile_id = failure.identity.profile_id
        try:
            repository.record_failures(profile_id, failure.failures)
            repository.record_fallback(
                profile_id,
                attempted_sources=failure.failed_sources,
                successful_source=None,
                degraded=False,
            )
            self._session.commit()
        except SQLAlchemyError:
            self._session.rollback()
            raise


@contextmanager
def open_profile_storage() -> Iterator[ProfileStorage]:
    """
    Storage bound to a fresh session, for use outside the request lifecycle.
    """

    with session_scope() as session:
        yield SQLAlchemyProfileStorage(session=session)
