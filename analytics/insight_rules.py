"""
analytics/insight_rules.py

Deterministic, rule-based coaching insights over a player's recent matches.
"""

from __future__ import annotations

from collections.abc import Sequence

from analytics.scoring import mean
from analytics.settings import AnalyticsSettings
from app.domain.player_profile import InsightItem, MatchRecord


# ---------------------------------------------------------------------------
# Insight catalogue
# ---------------------------------------------------------------------------

NO_MATCH_DATA = InsightItem(
    insight_type="general",
    title="No Recent Match Data",
    description="Play some ranked games to get personalized insights and coaching tips.",
    priority=1,
)

FOCUS_ON_CONSISTENCY = InsightItem(
    insight_type="performance",
    title="Focus on Consistency",
    description=(
        "Your recent win rate is below 40%. Focus on playing safer, minimizing deaths, "
        "and improving map awareness."
    ),
    priority=1,
)

WIN_STREAK = InsightItem(
    insight_type="performance",
    title="Great Win Streak!",
    description=(
        "You're performing excellently! Keep up the current playstyle and consider "
        "climbing to higher ranks."
    ),
    priority=1,
)

IMPROVE_KDA = InsightItem(
    insight_type="gameplay",
    title="Improve Your KDA",
    description=(
        "Focus on playing safer and positioning better in team fights. Avoid unnecessary risks."
    ),
    priority=2,
)

EXCELLENT_KDA = InsightItem(
    insight_type="gameplay",
    title="Excellent KDA",
    description="Your KDA is impressive! You have good positioning and decision-making skills.",
    priority=3,
)

IMPROVE_FARMING = InsightItem(
    insight_type="farming",
    title="Improve Your Farming",
    description=(
        "Your CS/min is below average. Practice last-hitting in training mode and focus "
        "on wave management."
    ),
    priority=1,
)

EXCELLENT_FARMING = InsightItem(
    insight_type="farming",
    title="Excellent Farming",
    description="Your CS numbers are great! You have solid farming fundamentals.",
    priority=3,
)

EXPAND_CHAMPION_POOL = InsightItem(
    insight_type="champion",
    title="Expand Your Champion Pool",
    description=(
        "You are playing very few champions. Learning 2-3 more champions can improve "
        "your adaptability."
    ),
    priority=2,
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class InsightRuleEngine:
    """
    Rule-based insight generator.

    Rules are evaluated independently over the most recent matches; several
    can fire for the same profile. With no matches, only the "no recent match
    data" insight is returned.

    Rules evaluated (in order)
    --------------------------
    1. Win rate below 40%        – focus on consistency.
    2. Win rate above 70%        – win streak praise.
    3. Mean KDA below 1.5        – improve KDA.
    4. Mean KDA above 4.0        – excellent KDA.
    5. Mean CS/min below 5       – improve farming.
    6. Mean CS/min above 7       – excellent farming.
    7. Fewer than 16 champions   – expand champion pool.
    """

    def __init__(self, settings: AnalyticsSettings | None = None) -> None:
        self._settings = settings or AnalyticsSettings()

    def evaluate(self, matches: Sequence[MatchRecord]) -> list[InsightItem]:
        s = self._settings
        window = list(matches[: s.insight_window])
        if not window:
            return [NO_MATCH_DATA]

        insights: list[InsightItem] = []

        win_rate = sum(1 for match in window if match.win) / len(window)
        if win_rate < s.low_win_rate:
            insights.append(FOCUS_ON_CONSISTENCY)
        if win_rate > s.high_win_rate:
            insights.append(WIN_STREAK)

        avg_kda = mean([match.kda for match in window])
        if avg_kda < s.low_kda:
            insights.append(IMPROVE_KDA)
        if avg_kda > s.high_kda:
            insights.append(EXCELLENT_KDA)

        avg_cs = mean([match.cs_per_minute for match in window])
        if avg_cs < s.low_cs:
            insights.append(IMPROVE_FARMING)
        if avg_cs > s.high_cs:
            insights.append(EXCELLENT_FARMING)

        distinct_champions = {match.champion for match in window if match.champion}
        if len(distinct_champions) < s.champion_pool_target:
            insights.append(EXPAND_CHAMPION_POOL)

        return insights
