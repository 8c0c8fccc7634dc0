"""
analytics/settings.py

Constants for the OP score and the coaching insight rules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_TIER_BONUS: Mapping[str, int] = MappingProxyType(
    {
        "CHALLENGER": 25,
        "GRANDMASTER": 23,
        "MASTER": 20,
        "DIAMOND": 15,
        "EMERALD": 10,
        "PLATINUM": 10,
        "GOLD": 5,
        "SILVER": 2,
        "BRONZE": 0,
        "IRON": -5,
    }
)


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Read-only analytics configuration passed to the engine at construction.
    """

    tier_bonus: Mapping[str, int] = field(default_factory=lambda: DEFAULT_TIER_BONUS)

    base_score: float = 50.0
    win_rate_weight: float = 30.0
    kda_weight: float = 8.0
    kda_cap: float = 25.0
    cs_weight: float = 2.0
    cs_cap: float = 15.0
    score_window: int = 10

    insight_window: int = 20
    low_win_rate: float = 0.4
    high_win_rate: float = 0.7
    low_kda: float = 1.5
    high_kda: float = 4.0
    low_cs: float = 5.0
    high_cs: float = 7.0
    champion_pool_target: int = 16

    def bonus_for(self, tier: str) -> int:
        return self.tier_bonus.get(tier.strip().upper(), 0)
