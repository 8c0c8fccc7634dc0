"""
Config helpers for source acquisition.
"""

from app.acquisition.config.loader import (
    build_acquisition_context,
    get_acquisition_settings,
    load_source_catalogue,
)
from app.acquisition.config.models import (
    AcquisitionContext,
    AcquisitionSettings,
    SourceCatalogue,
    SourceConfig,
    SourceKind,
)

__all__ = [
    "AcquisitionContext",
    "AcquisitionSettings",
    "SourceCatalogue",
    "SourceConfig",
    "SourceKind",
    "build_acquisition_context",
    "get_acquisition_settings",
    "load_source_catalogue",
]
