"""Privacy settings value types and their parsers.

Stored settings are JSON written by older clients, so reads go through
total parsers that never fail: a missing or invalid field falls back to
the documented default. Writes go through the strict validator instead.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from privacy.levels import (
    PRIVACY_FIELDS,
    WIRE_NAMES,
    ActivityLevel,
    PerformanceLevel,
    PortfolioValueLevel,
    PositionsLevel,
    WatchlistLevel,
    allowed_values,
    coerce_level,
    highest,
)
from utils.logger import get_privacy_logger

logger = get_privacy_logger()

# Partial field -> level mapping (workspace floors and member overrides)
PartialSettings = Mapping[str, Enum]


class PrivacySource(str, Enum):
    """Which input decided an effective privacy value."""

    ENFORCED = "enforced"
    WORKSPACE_OVERRIDE = "workspace_override"
    USER_DEFAULT = "user_default"


class PrivacySettingsError(ValueError):
    """Raised by the strict validator when settings are malformed."""

    def __init__(self, errors: List[str]):
        super().__init__("Invalid privacy settings: " + "; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class PrivacySettings:
    """
    A complete set of privacy levels, one per field.

    Defaults are the safe defaults new users start with.

    Attributes:
        portfolio_value: hidden < approximate < exact
        performance: hidden < visible
        positions: hidden < tickers_only < full
        activity: hidden < without_amounts < full
        watchlist: hidden < visible
    """

    portfolio_value: PortfolioValueLevel = PortfolioValueLevel.APPROXIMATE
    performance: PerformanceLevel = PerformanceLevel.VISIBLE
    positions: PositionsLevel = PositionsLevel.TICKERS_ONLY
    activity: ActivityLevel = ActivityLevel.WITHOUT_AMOUNTS
    watchlist: WatchlistLevel = WatchlistLevel.VISIBLE

    @classmethod
    def maximum(cls) -> "PrivacySettings":
        """Settings with every field at its most-disclosure level."""
        return cls(**{name: highest(name) for name in PRIVACY_FIELDS})

    def level(self, name: str) -> Enum:
        """Get the level of a field by name."""
        return getattr(self, name)

    def as_mapping(self) -> Dict[str, Enum]:
        """Field name -> level for all five fields."""
        return {name: getattr(self, name) for name in PRIVACY_FIELDS}

    def to_dict(self) -> Dict[str, str]:
        """Serialize to the camelCase wire shape."""
        return {WIRE_NAMES[name]: getattr(self, name).value for name in PRIVACY_FIELDS}

    def to_json(self) -> str:
        """Serialize to a JSON string for storage."""
        return json.dumps(self.to_dict())


@dataclass(frozen=True)
class EffectivePrivacy(PrivacySettings):
    """Privacy settings actually enforced for a (user, workspace) pair."""

    source: PrivacySource = PrivacySource.USER_DEFAULT

    @property
    def settings(self) -> PrivacySettings:
        """The five levels without the source tag."""
        return PrivacySettings(**self.as_mapping())

    def to_dict(self) -> Dict[str, str]:
        data = super().to_dict()
        data["source"] = self.source.value
        return data


@dataclass(frozen=True)
class WorkspacePrivacyPolicy:
    """
    Workspace-wide privacy rules.

    Attributes:
        minimum_sharing: Floor per field; fields not listed impose no floor
        enforced_transparency: Force maximum disclosure for every member
        allow_anonymous_mode: Carried through for clients, not used in resolution
    """

    minimum_sharing: Optional[Dict[str, Enum]] = None
    enforced_transparency: bool = False
    allow_anonymous_mode: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        minimum = None
        if self.minimum_sharing is not None:
            minimum = {
                WIRE_NAMES[name]: level.value
                for name, level in self.minimum_sharing.items()
            }
        return {
            "minimumSharing": minimum,
            "enforcedTransparency": self.enforced_transparency,
            "allowAnonymousMode": self.allow_anonymous_mode,
        }


def _load_json_object(raw: Any, what: str) -> Optional[Mapping[str, Any]]:
    """Decode stored JSON text or pass through a mapping; None if unusable."""
    if raw is None:
        return None
    if isinstance(raw, (str, bytes)):
        try:
            raw = json.loads(raw)
        except ValueError:
            logger.warning(f"Ignoring malformed {what} JSON")
            return None
    if not isinstance(raw, Mapping):
        return None
    return raw


def _raw_field(data: Mapping[str, Any], name: str) -> Any:
    """Read a field by wire name, falling back to the attribute name."""
    wire = WIRE_NAMES[name]
    if wire in data:
        return data[wire]
    return data.get(name)


def parse_partial_settings(raw: Any) -> Dict[str, Enum]:
    """
    Parse only the valid fields present in raw settings.

    Used for workspace floors and member overrides where an absent field
    means "no constraint" rather than "use the default".

    Args:
        raw: JSON text, mapping, or None

    Returns:
        Field name -> level for every present, valid field
    """
    data = _load_json_object(raw, "privacy settings")
    if data is None:
        return {}

    parsed = {}
    for name in PRIVACY_FIELDS:
        level = coerce_level(name, _raw_field(data, name))
        if level is not None:
            parsed[name] = level
    return parsed


def parse_privacy_settings(raw: Any) -> PrivacySettings:
    """
    Parse stored privacy settings without ever failing.

    Args:
        raw: JSON text, mapping, or None

    Returns:
        Total PrivacySettings with defaults for missing/invalid fields
    """
    return PrivacySettings(**parse_partial_settings(raw))


def parse_workspace_policy(raw: Any) -> WorkspacePrivacyPolicy:
    """
    Parse a stored workspace privacy policy without ever failing.

    Args:
        raw: JSON text, mapping, or None

    Returns:
        WorkspacePrivacyPolicy (no floor, not enforced when absent)
    """
    data = _load_json_object(raw, "workspace privacy policy")
    if data is None:
        return WorkspacePrivacyPolicy()

    minimum_raw = data.get("minimumSharing", data.get("minimum_sharing"))
    minimum = parse_partial_settings(minimum_raw) if minimum_raw is not None else None

    enforced = data.get("enforcedTransparency", data.get("enforced_transparency"))
    anonymous = data.get("allowAnonymousMode", data.get("allow_anonymous_mode"))

    return WorkspacePrivacyPolicy(
        minimum_sharing=minimum,
        enforced_transparency=enforced is True,
        allow_anonymous_mode=anonymous is True,
    )


def validate_privacy_settings(raw: Any) -> PrivacySettings:
    """
    Strictly validate settings submitted on a write path.

    Every field must be present with a valid wire value and no unknown
    keys are allowed.

    Args:
        raw: Mapping from a request body

    Returns:
        Validated PrivacySettings

    Raises:
        PrivacySettingsError: Listing every problem found
    """
    if not isinstance(raw, Mapping):
        raise PrivacySettingsError(["settings must be an object"])

    errors = []
    known = set(WIRE_NAMES.values())
    for key in raw:
        if key not in known:
            errors.append(f"unknown field '{key}'")

    levels = {}
    for name in PRIVACY_FIELDS:
        wire = WIRE_NAMES[name]
        if wire not in raw:
            errors.append(f"missing field '{wire}'")
            continue
        level = coerce_level(name, raw[wire])
        if level is None:
            errors.append(
                f"'{wire}' must be one of {list(allowed_values(name))}, got {raw[wire]!r}"
            )
            continue
        levels[name] = level

    if errors:
        raise PrivacySettingsError(errors)

    return PrivacySettings(**levels)
