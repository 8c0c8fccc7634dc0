"""
analytics/engine.py

Adds the OP score and coaching insights to a canonical profile.
"""

from __future__ import annotations

import dataclasses

from analytics.insight_rules import InsightRuleEngine
from analytics.scoring import OpScoreModel
from analytics.settings import AnalyticsSettings
from app.domain.player_profile import CanonicalProfile


class AnalyticsEngine:
    """Deterministic analytics pass. No I/O, no randomness.

    ``analyze`` never mutates its input; it returns a new profile with
    ``op_score`` and ``insights`` replaced.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self.settings = settings or AnalyticsSettings()
        self._score_model = OpScoreModel(self.settings)
        self._rules = InsightRuleEngine(self.settings)

    def analyze(self, profile: CanonicalProfile) -> CanonicalProfile:
        return dataclasses.replace(
            profile,
            op_score=self._score_model.compute(profile),
            insights=tuple(self._rules.evaluate(profile.matches)),
        )
