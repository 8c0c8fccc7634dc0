"""
Source adapter registry and factory.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import requests

from app.acquisition.adapters import (
    DataDragonAdapter,
    LeagueOfGraphsAdapter,
    MobalyticsAdapter,
    OpggAdapter,
    RiotApiAdapter,
    SourceAdapter,
)
from app.acquisition.config.models import AcquisitionContext
from app.acquisition.logging_utils import log_event
from app.acquisition.retry import RetryPolicy

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Maps source names to adapter classes and builds one adapter per configured source.
    """

    def __init__(self, registrations: Mapping[str, type[SourceAdapter]] | None = None) -> None:
        builtins: dict[str, type[SourceAdapter]] = {
            adapter.source_name: adapter
            for adapter in (
                RiotApiAdapter,
                OpggAdapter,
                MobalyticsAdapter,
                LeagueOfGraphsAdapter,
                DataDragonAdapter,
            )
        }
        if registrations:
            builtins.update(registrations)
        self._registrations = builtins

    def create_adapters(
        self,
        *,
        context: AcquisitionContext,
        session: requests.Session | None = None,
        retry_policy: RetryPolicy | None = None,
    ) -> dict[str, SourceAdapter]:
        """
        Build adapters for every registered source present in the catalogue.

        One HTTP session and one retry policy are shared by all adapters.
        """

        shared_session = session or requests.Session()
        shared_policy = retry_policy or RetryPolicy()
        adapters: dict[str, SourceAdapter] = {}
        for source_name, adapter_class in self._registrations.items():
            if source_name not in context.catalogue:
                log_event(
                    logger,
                    logging.WARNING,
                    "source_not_configured",
                    source=source_name,
                    catalogue_version=context.catalogue.version,
                )
                continue
            adapters[source_name] = adapter_class(
                context=context,
                session=shared_session,
                retry_policy=shared_policy,
            )
        return adapters
