"""Ordered disclosure scales for each privacy field.

Every field is an enum on a scale ordered from least to most disclosure.
The scales are kept as data (an ordered tuple per field) so a new
intermediate level only needs a new enum member and a new tuple slot.
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple


class PortfolioValueLevel(str, Enum):
    """How much of the total portfolio value is shown."""

    HIDDEN = "hidden"
    APPROXIMATE = "approximate"  # Bucketed range only
    EXACT = "exact"


class PerformanceLevel(str, Enum):
    """Whether gains/losses are shown."""

    HIDDEN = "hidden"
    VISIBLE = "visible"


class PositionsLevel(str, Enum):
    """How much of the position list is shown."""

    HIDDEN = "hidden"
    TICKERS_ONLY = "tickers_only"  # Symbols without quantities or values
    FULL = "full"


class ActivityLevel(str, Enum):
    """How much of the trading activity is shown."""

    HIDDEN = "hidden"
    WITHOUT_AMOUNTS = "without_amounts"
    FULL = "full"


class WatchlistLevel(str, Enum):
    """Whether the personal watchlist is shown."""

    HIDDEN = "hidden"
    VISIBLE = "visible"


# Field order matches the wire shape
PRIVACY_FIELDS: Tuple[str, ...] = (
    "portfolio_value",
    "performance",
    "positions",
    "activity",
    "watchlist",
)

# Python attribute name -> JSON key
WIRE_NAMES: Dict[str, str] = {
    "portfolio_value": "portfolioValue",
    "performance": "performance",
    "positions": "positions",
    "activity": "activity",
    "watchlist": "watchlist",
}

FIELD_SCALES: Dict[str, Tuple[Enum, ...]] = {
    "portfolio_value": (
        PortfolioValueLevel.HIDDEN,
        PortfolioValueLevel.APPROXIMATE,
        PortfolioValueLevel.EXACT,
    ),
    "performance": (
        PerformanceLevel.HIDDEN,
        PerformanceLevel.VISIBLE,
    ),
    "positions": (
        PositionsLevel.HIDDEN,
        PositionsLevel.TICKERS_ONLY,
        PositionsLevel.FULL,
    ),
    "activity": (
        ActivityLevel.HIDDEN,
        ActivityLevel.WITHOUT_AMOUNTS,
        ActivityLevel.FULL,
    ),
    "watchlist": (
        WatchlistLevel.HIDDEN,
        WatchlistLevel.VISIBLE,
    ),
}

_RANKS: Dict[str, Dict[Enum, int]] = {
    field: {level: index for index, level in enumerate(scale)}
    for field, scale in FIELD_SCALES.items()
}


def _check_field(field: str) -> None:
    if field not in FIELD_SCALES:
        raise KeyError(f"Unknown privacy field: {field}")


def rank(field: str, level: Enum) -> int:
    """
    Position of a level on its field's scale (0 = least disclosure).

    Args:
        field: Privacy field name (snake_case)
        level: Level enum member for that field

    Returns:
        Rank index

    Raises:
        KeyError: If the field is unknown or the level belongs to another scale
    """
    _check_field(field)
    return _RANKS[field][level]


def lowest(field: str) -> Enum:
    """Least-disclosure level for a field."""
    _check_field(field)
    return FIELD_SCALES[field][0]


def highest(field: str) -> Enum:
    """Most-disclosure level for a field."""
    _check_field(field)
    return FIELD_SCALES[field][-1]


def higher_rank(field: str, a: Enum, b: Enum) -> Enum:
    """Return whichever of two levels discloses more (ties return ``a``)."""
    return a if rank(field, a) >= rank(field, b) else b


def coerce_level(field: str, raw: Any) -> Optional[Enum]:
    """
    Convert a raw value into a level of the given field's scale.

    Accepts the enum member itself or its wire string. Anything else
    (wrong type, unknown string, a level of another field) yields None.

    Args:
        field: Privacy field name
        raw: Value read from storage or a request

    Returns:
        Level enum member or None
    """
    _check_field(field)
    for level in FIELD_SCALES[field]:
        if raw is level:
            return level
        if isinstance(raw, str) and not isinstance(raw, Enum) and raw == level.value:
            return level
    return None


def allowed_values(field: str) -> Tuple[str, ...]:
    """Wire strings accepted for a field, least disclosure first."""
    _check_field(field)
    return tuple(level.value for level in FIELD_SCALES[field])
