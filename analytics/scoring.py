"""
analytics/scoring.py

OP score model: a 0–100 composite of ranked standing and recent form.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from analytics.settings import AnalyticsSettings
from app.domain.player_profile import CanonicalProfile, MatchRecord


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class OpScoreModel:
    """Composite performance score for one canonical profile.

    Starting from the base score:

    - a ranked solo-queue entry adds ``win_rate * 30`` plus the tier bonus
      (unknown or unranked tiers add nothing);
    - the most recent matches add ``min(mean_kda * 8, 25)`` and
      ``min(mean_cs_per_min * 2, 15)``.

    The result is rounded half up and clamped to [0, 100].
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def compute(self, profile: CanonicalProfile) -> int:
        s = self._settings
        score = s.base_score

        solo = profile.solo_queue
        if solo is not None:
            win_rate = solo.wins / solo.games if solo.games > 0 else 0.0
            score += win_rate * s.win_rate_weight
            score += s.bonus_for(solo.tier)

        recent: Sequence[MatchRecord] = profile.matches[: s.score_window]
        if recent:
            score += min(mean([match.kda for match in recent]) * s.kda_weight, s.kda_cap)
            score += min(mean([match.cs_per_minute for match in recent]) * s.cs_weight, s.cs_cap)

        return int(clamp(math.floor(score + 0.5), 0, 100))
