"""Render values, positions and performance under a privacy level."""

import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from config.privacy import PrivacyConfig
from portfolio.position import Holding, PositionTicker
from privacy.levels import (
    ActivityLevel,
    PerformanceLevel,
    PortfolioValueLevel,
    PositionsLevel,
    WatchlistLevel,
)
from privacy.settings import PrivacySettings

_DEFAULT_CONFIG = PrivacyConfig()

# Settings page labels per field and level
SETTING_LABELS = {
    "portfolio_value": {
        PortfolioValueLevel.EXACT: "Exact value",
        PortfolioValueLevel.APPROXIMATE: "Approximate range",
        PortfolioValueLevel.HIDDEN: "Hidden",
    },
    "performance": {
        PerformanceLevel.VISIBLE: "Gains and losses visible",
        PerformanceLevel.HIDDEN: "Hidden",
    },
    "positions": {
        PositionsLevel.FULL: "Full positions",
        PositionsLevel.TICKERS_ONLY: "Tickers only",
        PositionsLevel.HIDDEN: "Hidden",
    },
    "activity": {
        ActivityLevel.FULL: "Trades with amounts",
        ActivityLevel.WITHOUT_AMOUNTS: "Trades without amounts",
        ActivityLevel.HIDDEN: "Hidden",
    },
    "watchlist": {
        WatchlistLevel.VISIBLE: "Visible",
        WatchlistLevel.HIDDEN: "Hidden",
    },
}


@dataclass(frozen=True)
class FormattedValue:
    """
    A portfolio value prepared for display.

    Attributes:
        display: Text to show
        exact: Raw number, only when the level is exact
        range: (lower, upper) bucket, only when the level is approximate
    """

    display: str
    exact: Optional[float] = None
    range: Optional[Tuple[float, float]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "display": self.display,
            "exact": self.exact,
            "range": (
                {"min": self.range[0], "max": self.range[1]}
                if self.range is not None
                else None
            ),
        }


@dataclass(frozen=True)
class PerformanceDisplay:
    """Change and change percent as shown to others (None when withheld)."""

    change: Optional[float] = None
    change_percent: Optional[float] = None

    @property
    def visible(self) -> bool:
        return self.change_percent is not None


def _trim(amount: float) -> str:
    return f"{amount:.2f}".rstrip("0").rstrip(".")


def _abbreviate(amount: float, symbol: str) -> str:
    """Short currency text for range bounds ($40K, $2.5K, $1.25M, $900)."""
    sign = "-" if amount < 0 else ""
    amount = abs(amount)
    if amount >= 1_000_000:
        return f"{sign}{symbol}{_trim(amount / 1_000_000)}M"
    if amount >= 1_000:
        return f"{sign}{symbol}{_trim(amount / 1_000)}K"
    return f"{sign}{symbol}{_trim(amount)}"


def format_currency(value: float, config: Optional[PrivacyConfig] = None) -> str:
    """Exact currency text with thousands separators and two decimals."""
    config = config or _DEFAULT_CONFIG
    sign = "-" if value < 0 else ""
    return f"{sign}{config.currency_symbol}{abs(value):,.2f}"


def format_portfolio_value(
    value: float,
    level: PortfolioValueLevel,
    config: Optional[PrivacyConfig] = None,
) -> FormattedValue:
    """
    Format a portfolio value for others to see.

    Args:
        value: Total portfolio value in USD
        level: Effective portfolio value level
        config: Bucket width and placeholder (defaults if None)

    Returns:
        FormattedValue; the raw number is withheld unless level is exact
    """
    config = config or _DEFAULT_CONFIG

    if level == PortfolioValueLevel.EXACT:
        return FormattedValue(display=format_currency(value, config), exact=value)

    if level == PortfolioValueLevel.APPROXIMATE:
        width = config.approximate_bucket_usd
        lower = math.floor(value / width) * width
        upper = lower + width
        display = (
            f"{_abbreviate(lower, config.currency_symbol)}"
            f"-{_abbreviate(upper, config.currency_symbol)}"
        )
        return FormattedValue(display=display, range=(lower, upper))

    return FormattedValue(display=config.hidden_placeholder)


def filter_positions(
    positions: Sequence[Holding],
    level: PositionsLevel,
) -> List[Union[Holding, PositionTicker]]:
    """
    Project a holdings list down to what the level allows.

    Args:
        positions: Full holdings
        level: Effective positions level

    Returns:
        Unchanged holdings (full), ticker projections (tickers_only)
        or an empty list (hidden)
    """
    if level == PositionsLevel.FULL:
        return list(positions)
    if level == PositionsLevel.TICKERS_ONLY:
        return [position.to_ticker() for position in positions]
    return []


def format_performance(
    change: float,
    change_percent: float,
    level: PerformanceLevel,
) -> PerformanceDisplay:
    """Pass change figures through only when performance is visible."""
    if level == PerformanceLevel.VISIBLE:
        return PerformanceDisplay(change=change, change_percent=change_percent)
    return PerformanceDisplay()


def performance_beside_value(performance: PerformanceDisplay, value: FormattedValue) -> PerformanceDisplay:
    """
    Keep the dollar change only next to an exact value.

    Change and change percent together give back the value they were
    computed from, so an approximate or hidden value leaves the percent
    alone.

    Args:
        performance: Output of format_performance
        value: Output of format_portfolio_value for the same member

    Returns:
        The same display, or one with the dollar change removed
    """
    if value.exact is not None or not performance.visible:
        return performance
    return PerformanceDisplay(change_percent=performance.change_percent)


def describe_settings(settings: PrivacySettings) -> Dict[str, str]:
    """
    Human-readable label for each field of a settings value.

    Args:
        settings: Privacy settings

    Returns:
        Field name -> label
    """
    return {
        name: SETTING_LABELS[name][level]
        for name, level in settings.as_mapping().items()
    }
