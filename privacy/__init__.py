"""
Privacy resolution and privacy-aware formatting.

Resolves each member's effective privacy inside a workspace from their
defaults, their workspace override and the workspace policy, then turns
the result into display decisions and formatted payloads.
"""

from privacy.activity import (
    activity_privacy_level,
    filter_activities,
    redact_activity,
    should_show_activity,
)
from privacy.classifier import (
    DisclosureTier,
    VisibilityDecisions,
    can_rank_in_leaderboard,
    can_show_activity,
    can_show_activity_amounts,
    can_show_position_details,
    can_show_positions,
    can_show_watchlist,
    is_visible_in_aggregates,
    performance_disclosure_tier,
)
from privacy.formatter import (
    FormattedValue,
    PerformanceDisplay,
    describe_settings,
    filter_positions,
    format_performance,
    format_portfolio_value,
    performance_beside_value,
)
from privacy.levels import (
    ActivityLevel,
    PerformanceLevel,
    PortfolioValueLevel,
    PositionsLevel,
    WatchlistLevel,
)
from privacy.resolver import resolve_privacy
from privacy.settings import (
    EffectivePrivacy,
    PrivacySettings,
    PrivacySettingsError,
    PrivacySource,
    WorkspacePrivacyPolicy,
    parse_partial_settings,
    parse_privacy_settings,
    parse_workspace_policy,
    validate_privacy_settings,
)

__all__ = [
    "ActivityLevel",
    "DisclosureTier",
    "EffectivePrivacy",
    "FormattedValue",
    "PerformanceDisplay",
    "PerformanceLevel",
    "PortfolioValueLevel",
    "PositionsLevel",
    "PrivacySettings",
    "PrivacySettingsError",
    "PrivacySource",
    "VisibilityDecisions",
    "WatchlistLevel",
    "WorkspacePrivacyPolicy",
    "activity_privacy_level",
    "can_rank_in_leaderboard",
    "can_show_activity",
    "can_show_activity_amounts",
    "can_show_position_details",
    "can_show_positions",
    "can_show_watchlist",
    "describe_settings",
    "filter_activities",
    "filter_positions",
    "format_performance",
    "performance_beside_value",
    "format_portfolio_value",
    "is_visible_in_aggregates",
    "parse_partial_settings",
    "parse_privacy_settings",
    "parse_workspace_policy",
    "performance_disclosure_tier",
    "redact_activity",
    "resolve_privacy",
    "should_show_activity",
    "validate_privacy_settings",
]
