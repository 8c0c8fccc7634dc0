"""
app/services/summoner_service.py

Service orchestration for summoner lookups.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractContextManager
from functools import lru_cache

import requests
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.acquisition.config import build_acquisition_context
from app.acquisition.config.models import AcquisitionContext
from app.acquisition.errors import TotalFailure
from app.acquisition.failure_log import get_failure_log
from app.acquisition.logging_utils import log_event
from app.acquisition.orchestrator import AcquisitionOutcome, FailoverOrchestrator
from app.acquisition.registry import AdapterRegistry
from app.acquisition.storage import ProfileStorage, open_profile_storage
from app.config import get_persistence_settings
from app.domain.player_profile import Identity
from app.repositories.summoner_profile_repository import SummonerProfileRepository
from db.models.profile_insight import ProfileInsight

logger = logging.getLogger(__name__)

StorageFactory = Callable[[], AbstractContextManager[ProfileStorage]]


def build_orchestrator(
    context: AcquisitionContext | None = None,
    *,
    session: requests.Session | None = None,
) -> FailoverOrchestrator:
    resolved = context or build_acquisition_context()
    adapters = AdapterRegistry().create_adapters(context=resolved, session=session)
    return FailoverOrchestrator(
        adapters=adapters,
        failure_log=get_failure_log(),
        default_source_timeout_seconds=resolved.settings.source_timeout_seconds,
    )


class SummonerLookupService:
    """
    Runs the acquisition pipeline and hands results to persistence.

    Persistence is a separate step the caller schedules after responding; it
    logs and swallows storage errors so a stored profile is never a condition
    for a successful lookup.
    """

    def __init__(
        self,
        *,
        orchestrator: FailoverOrchestrator | None = None,
        storage_factory: StorageFactory | None = None,
        persistence_enabled: bool | None = None,
    ) -> None:
        self._orchestrator = orchestrator or build_orchestrator()
        self._storage_factory = storage_factory or open_profile_storage
        self.persistence_enabled = (
            get_persistence_settings().enabled if persistence_enabled is None else persistence_enabled
        )

    def lookup(self, identity: Identity) -> AcquisitionOutcome:
        """
        Raises:
            TotalFailure: no source, static fallback included, produced data.
        """

        return self._orchestrator.acquire(identity)

    def persist_outcome(self, outcome: AcquisitionOutcome) -> None:
        if not self.persistence_enabled:
            return
        profile_id = outcome.profile.summoner.id
        try:
            with self._storage_factory() as storage:
                # A static-data placeholder must not replace the last good profile.
                if outcome.degraded:
                    storage.store_degraded_outcome(outcome)
                else:
                    storage.store_outcome(outcome)
        except (SQLAlchemyError, RuntimeError) as exc:
            log_event(
                logger,
                logging.ERROR,
                "profile_persist_failed",
                profile_id=profile_id,
                error=str(exc),
            )
            return
        log_event(
            logger,
            logging.INFO,
            "profile_persisted",
            profile_id=profile_id,
            data_source=outcome.profile.data_source,
            degraded=outcome.degraded,
        )

    def persist_total_failure(self, failure: TotalFailure) -> None:
        if not self.persistence_enabled:
            return
        try:
            with self._storage_factory() as storage:
                storage.store_total_failure(failure)
        except (SQLAlchemyError, RuntimeError) as exc:
            log_event(
                logger,
                logging.ERROR,
                "failure_audit_persist_failed",
                profile_id=failure.identity.profile_id,
                error=str(exc),
            )

    @staticmethod
    def get_insights(*, db: Session, profile_id: str) -> list[ProfileInsight] | None:
        """
        Stored insights ordered by priority, or None for an unknown profile.
        """

        repository = SummonerProfileRepository(db)
        if not repository.profile_exists(profile_id):
            return None
        return repository.get_insights(profile_id)


@lru_cache(maxsize=1)
def get_summoner_lookup_service() -> SummonerLookupService:
    """
    Build and cache the summoner lookup service.
    """

    return SummonerLookupService()
