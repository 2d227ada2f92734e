"""Privacy settings schemas."""

from typing import Dict, Literal, Optional

from pydantic import ConfigDict, Field

from api.schemas.common import CamelModel
from privacy.settings import (
    PrivacySettings,
    WorkspacePrivacyPolicy,
    validate_privacy_settings,
)

PortfolioValueField = Literal["exact", "approximate", "hidden"]
PerformanceField = Literal["visible", "hidden"]
PositionsField = Literal["full", "tickers_only", "hidden"]
ActivityField = Literal["full", "without_amounts", "hidden"]
WatchlistField = Literal["visible", "hidden"]


class PrivacySettingsPayload(CamelModel):
    """Complete privacy settings in the wire shape.

    Used for both requests (strict: every field required, no extras)
    and responses.
    """

    model_config = ConfigDict(extra="forbid")

    portfolio_value: PortfolioValueField = Field(description="Portfolio value disclosure")
    performance: PerformanceField = Field(description="Gain/loss disclosure")
    positions: PositionsField = Field(description="Position list disclosure")
    activity: ActivityField = Field(description="Activity feed disclosure")
    watchlist: WatchlistField = Field(description="Watchlist disclosure")

    @classmethod
    def from_settings(cls, settings: PrivacySettings) -> "PrivacySettingsPayload":
        return cls.model_validate(PrivacySettings(**settings.as_mapping()).to_dict())

    def to_settings(self) -> PrivacySettings:
        """Run the strict validator over the payload."""
        return validate_privacy_settings(self.model_dump(by_alias=True))


class UserPrivacyRequest(CamelModel):
    """Body of PUT /users/me/privacy."""

    model_config = ConfigDict(extra="forbid")

    privacy_defaults: PrivacySettingsPayload


class UserPrivacyResponse(CamelModel):
    user_id: str
    privacy_defaults: PrivacySettingsPayload
    labels: Dict[str, str] = Field(description="Human-readable label per field")


class WorkspaceOverrideRequest(CamelModel):
    """Body of PUT /workspaces/{id}/privacy; null clears the override."""

    model_config = ConfigDict(extra="forbid")

    privacy_override: Optional[PrivacySettingsPayload] = None


class WorkspacePolicySchema(CamelModel):
    minimum_sharing: Optional[Dict[str, str]] = None
    enforced_transparency: bool = False
    allow_anonymous_mode: bool = False

    @classmethod
    def from_policy(cls, policy: WorkspacePrivacyPolicy) -> "WorkspacePolicySchema":
        return cls.model_validate(policy.to_dict())


class VisibilityDecisionsSchema(CamelModel):
    disclosure_tier: Literal["full", "partial", "hidden"]
    can_rank: bool
    can_show_activity: bool
    can_show_activity_amounts: bool
    can_show_positions: bool
    can_show_position_details: bool
    can_show_watchlist: bool
    visible_in_aggregates: bool


class EffectivePrivacyResponse(CamelModel):
    """Privacy enforced for the caller in a workspace, with its consequences."""

    workspace_id: str
    user_id: str
    settings: PrivacySettingsPayload
    source: Literal["enforced", "workspace_override", "user_default"]
    decisions: VisibilityDecisionsSchema
    workspace_policy: WorkspacePolicySchema
    has_override: bool

