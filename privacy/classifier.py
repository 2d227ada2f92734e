"""Display decisions derived from an effective privacy value.

Every consumer (aggregates, leaderboard, activity feed, position
listings) asks these predicates instead of reading levels directly.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict

from privacy.levels import (
    ActivityLevel,
    PerformanceLevel,
    PortfolioValueLevel,
    PositionsLevel,
    WatchlistLevel,
)
from privacy.settings import PrivacySettings


class DisclosureTier(str, Enum):
    """How much of a member's performance others may see."""

    FULL = "full"
    PARTIAL = "partial"
    HIDDEN = "hidden"


def performance_disclosure_tier(privacy: PrivacySettings) -> DisclosureTier:
    """
    Collapse value and performance levels into one disclosure tier.

    Args:
        privacy: Effective (or plain) privacy settings

    Returns:
        HIDDEN if either value or performance is hidden,
        FULL if value is exact and performance visible, else PARTIAL
    """
    if (
        privacy.performance == PerformanceLevel.HIDDEN
        or privacy.portfolio_value == PortfolioValueLevel.HIDDEN
    ):
        return DisclosureTier.HIDDEN
    if (
        privacy.portfolio_value == PortfolioValueLevel.EXACT
        and privacy.performance == PerformanceLevel.VISIBLE
    ):
        return DisclosureTier.FULL
    return DisclosureTier.PARTIAL


def can_rank_in_leaderboard(privacy: PrivacySettings) -> bool:
    """Ranking needs exact values and visible performance."""
    return (
        privacy.performance == PerformanceLevel.VISIBLE
        and privacy.portfolio_value == PortfolioValueLevel.EXACT
    )


def can_show_activity(privacy: PrivacySettings) -> bool:
    return privacy.activity != ActivityLevel.HIDDEN


def can_show_activity_amounts(privacy: PrivacySettings) -> bool:
    return privacy.activity == ActivityLevel.FULL


def can_show_positions(privacy: PrivacySettings) -> bool:
    return privacy.positions != PositionsLevel.HIDDEN


def can_show_position_details(privacy: PrivacySettings) -> bool:
    return privacy.positions == PositionsLevel.FULL


def can_show_watchlist(privacy: PrivacySettings) -> bool:
    return privacy.watchlist == WatchlistLevel.VISIBLE


def is_visible_in_aggregates(privacy: PrivacySettings) -> bool:
    """Whether a member's series may contribute to squad aggregates."""
    return performance_disclosure_tier(privacy) != DisclosureTier.HIDDEN


@dataclass(frozen=True)
class VisibilityDecisions:
    """All classifier outputs for one effective privacy value."""

    disclosure_tier: DisclosureTier
    can_rank: bool
    can_show_activity: bool
    can_show_activity_amounts: bool
    can_show_positions: bool
    can_show_position_details: bool
    can_show_watchlist: bool
    visible_in_aggregates: bool

    @classmethod
    def classify(cls, privacy: PrivacySettings) -> "VisibilityDecisions":
        return cls(
            disclosure_tier=performance_disclosure_tier(privacy),
            can_rank=can_rank_in_leaderboard(privacy),
            can_show_activity=can_show_activity(privacy),
            can_show_activity_amounts=can_show_activity_amounts(privacy),
            can_show_positions=can_show_positions(privacy),
            can_show_position_details=can_show_position_details(privacy),
            can_show_watchlist=can_show_watchlist(privacy),
            visible_in_aggregates=is_visible_in_aggregates(privacy),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["disclosure_tier"] = self.disclosure_tier.value
        return data
