"""Squad (workspace) history, leaderboard and activity schemas."""

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import Field

from api.schemas.common import CamelModel
from api.schemas.portfolio import PeriodCode

DisclosureTierField = Literal["full", "partial", "hidden"]


# ============================================================================
# Squad history
# ============================================================================


class MemberPointSchema(CamelModel):
    date: date
    value: float
    percent_change: float


class TrendPointSchema(CamelModel):
    date: date
    percent_change: float


class AveragePointSchema(CamelModel):
    date: date
    percent_change: float = Field(description="Mean percent change of visible members")


class TotalPointSchema(CamelModel):
    date: date
    value: float = Field(description="Summed value of visible members")


class MemberSeriesSchema(CamelModel):
    user_id: str
    name: Optional[str] = None
    is_visible: bool
    history: List[TrendPointSchema] = Field(
        default_factory=list, description="Empty when the member is hidden"
    )


class SquadMetadataSchema(CamelModel):
    total_members: int
    visible_members: int
    hidden_members: int


class SquadHistoryResponse(CamelModel):
    """Aggregated history of a squad for a period."""

    workspace_id: str
    period: PeriodCode
    squad_average: List[AveragePointSchema]
    squad_total: List[TotalPointSchema]
    members: List[MemberSeriesSchema]
    your_history: List[MemberPointSchema]
    metadata: SquadMetadataSchema


# ============================================================================
# Leaderboard
# ============================================================================


class ValueRangeSchema(CamelModel):
    min: float
    max: float


class FormattedValueSchema(CamelModel):
    display: str
    exact: Optional[float] = None
    range: Optional[ValueRangeSchema] = None


class PerformanceSchema(CamelModel):
    change: Optional[float] = None
    change_percent: Optional[float] = None


class PositionSchema(CamelModel):
    """A holding; amounts are absent for ticker-only disclosure."""

    symbol: str
    security_name: Optional[str] = None
    security_type: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None
    market_value: Optional[float] = None
    unrealized_pl: Optional[float] = Field(default=None, alias="unrealizedPL")


class LeaderboardEntrySchema(CamelModel):
    user_id: str
    name: Optional[str] = None
    rank: Optional[int] = Field(default=None, description="None when the member cannot be ranked")
    is_current_user: bool = False
    disclosure_tier: DisclosureTierField
    portfolio_value: FormattedValueSchema
    performance: PerformanceSchema
    positions: List[PositionSchema]
    position_count: int = Field(description="Number of positions the member discloses")


class LeaderboardStatsSchema(CamelModel):
    total_members: int
    ranked_members: int
    combined_value: float = Field(description="Sum of exactly disclosed portfolio values")
    average_return: float = Field(description="Mean disclosed return (%)")


class LeaderboardResponse(CamelModel):
    workspace_id: str
    entries: List[LeaderboardEntrySchema]
    stats: LeaderboardStatsSchema


# ============================================================================
# Activity feed
# ============================================================================


class ActivitySchema(CamelModel):
    id: str
    user_id: str
    user_name: Optional[str] = None
    type: str
    symbol: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None
    value: Optional[float] = None
    message: Optional[str] = None
    created_at: datetime
    privacy_level: DisclosureTierField = Field(
        description="How much of the author's activity is disclosed"
    )


class ActivityFeedResponse(CamelModel):
    workspace_id: str
    items: List[ActivitySchema]
    total: int = Field(description="Visible entries across all pages")
    limit: int
    offset: int
    has_more: bool
