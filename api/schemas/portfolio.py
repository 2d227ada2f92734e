"""Portfolio history schemas."""

from datetime import date
from typing import List, Literal

from pydantic import Field

from api.schemas.common import CamelModel

PeriodCode = Literal["1D", "1W", "1M", "3M", "6M", "1Y", "YTD"]


class SamplePointSchema(CamelModel):
    """One sampled point of a personal history."""

    date: date
    value: float = Field(description="Total portfolio value (USD)")
    pl: float = Field(description="Total profit/loss (USD)")
    pl_percent: float = Field(description="Profit/loss relative to cost basis (%)")
    is_interpolated: bool = Field(description="Filled from a neighbouring snapshot")


class PortfolioHistoryResponse(CamelModel):
    """Caller's sampled portfolio history for a period."""

    period: PeriodCode
    join_date: date = Field(description="First day the caller has portfolio data")
    points: List[SamplePointSchema]
    actual_count: int = Field(description="Points backed by a real snapshot")
    total_count: int = Field(description="Number of sampled points")
    coverage: int = Field(ge=0, le=100, description="Percent of points backed by real snapshots")
    data_quality: Literal["excellent", "good", "fair", "poor"]
