"""Turn irregular daily snapshots into evenly spaced, gap-filled series."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np
import pandas as pd

from config.history import HistoryConfig
from history.periods import TimePeriod, period_start
from portfolio.snapshot import PortfolioSnapshot
from utils.logger import get_history_logger

logger = get_history_logger()

DayLike = Union[date, datetime, pd.Timestamp, str]


class DataQuality(str, Enum):
    """Coverage-based quality label for a sampled history."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True)
class SamplePoint:
    """One point of a sampled series."""

    date: date
    value: float
    pl: float
    pl_percent: float
    is_interpolated: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "value": self.value,
            "pl": self.pl,
            "plPercent": self.pl_percent,
            "isInterpolated": self.is_interpolated,
        }


@dataclass(frozen=True)
class SampledHistory:
    """
    Sampled series plus how much of it is backed by real snapshots.

    Attributes:
        period: Look-back period sampled
        points: Chronological points, one per calendar day
        actual_count: Points backed by an exact snapshot
        total_count: Number of points
        coverage: round(actual_count / total_count * 100), 0 when empty
        quality: Coverage-based quality label
    """

    period: TimePeriod
    points: List[SamplePoint] = field(default_factory=list)
    actual_count: int = 0
    total_count: int = 0
    coverage: int = 0
    quality: DataQuality = DataQuality.POOR

    @property
    def dates(self) -> List[date]:
        return [point.date for point in self.points]


def to_day(value: DayLike) -> date:
    """
    Normalize a date-like value to a calendar day.

    Timezone-aware timestamps are converted to UTC first.
    """
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp.date()


def pl_percent(value: float, pl: float, epsilon: float = 0.01) -> float:
    """
    Profit/loss as a percentage of cost basis (value - pl).

    Returns 0 when the basis is within ``epsilon`` of zero or the result
    is not finite.
    """
    basis = value - pl
    if abs(basis) < epsilon:
        return 0.0
    with np.errstate(divide="ignore", invalid="ignore"):
        result = np.float64(pl) / np.float64(basis) * 100.0
    return float(result) if np.isfinite(result) else 0.0


def coverage_percent(actual: int, total: int) -> int:
    """Rounded percentage of real points, halves rounding up."""
    if total <= 0:
        return 0
    return (2 * actual * 100 + total) // (2 * total)


def resolve_join_date(
    first_connection: Optional[DayLike],
    first_snapshot: Optional[DayLike],
    today: Optional[date] = None,
) -> date:
    """
    Earliest day a user has portfolio data for.

    Args:
        first_connection: When the first brokerage account was connected
        first_snapshot: Date of the oldest snapshot

    Returns:
        The earlier of the known dates, or today when neither is known
    """
    known = [to_day(d) for d in (first_connection, first_snapshot) if d is not None]
    if known:
        return min(known)
    return today or date.today()


class TimeSeriesSampler:
    """
    Samples a member's snapshot history for a look-back period.

    Steps:
    - Sum same-day snapshots (one per connected account)
    - Drop snapshots before the effective start (period start or join date)
    - Lay an evenly spaced grid of sample days over the period
    - Fill each day from an exact snapshot, else the nearest earlier one,
      else the nearest later one; days before the join date are zero
    """

    def __init__(self, config: Optional[HistoryConfig] = None):
        """
        Initialize TimeSeriesSampler.

        Args:
            config: Sample counts and thresholds (defaults if None)
        """
        self.config = config or HistoryConfig()

    def group_by_day(self, snapshots: Sequence[PortfolioSnapshot]) -> pd.DataFrame:
        """
        Sum snapshots per calendar day.

        Args:
            snapshots: Raw snapshots across all of a user's accounts

        Returns:
            DataFrame indexed by day (DatetimeIndex, ascending) with
            'value' and 'pl' columns
        """
        if not snapshots:
            return pd.DataFrame(
                {"value": pd.Series(dtype=float), "pl": pd.Series(dtype=float)},
                index=pd.DatetimeIndex([], name="date"),
            )

        frame = pd.DataFrame(
            {
                "date": pd.to_datetime([to_day(s.date) for s in snapshots]),
                "value": [float(s.value) for s in snapshots],
                "pl": [float(s.pl) for s in snapshots],
            }
        )
        return frame.groupby("date", sort=True)[["value", "pl"]].sum()

    def sample_dates(self, period: TimePeriod, today: date) -> List[date]:
        """
        Evenly spaced sample days from the period start to today.

        The last day is always today and no day appears twice.
        """
        start = period_start(period, today)
        if start >= today:
            return [today]

        count = self.config.points_for(period.value)
        stamps = pd.date_range(pd.Timestamp(start), pd.Timestamp(today), periods=count).normalize()
        days = list(dict.fromkeys(stamp.date() for stamp in stamps))
        if days[-1] != today:
            days.append(today)
        return days

    def quality_level(self, coverage: int) -> DataQuality:
        """Map a coverage percentage to a quality label."""
        if coverage >= self.config.quality_excellent_pct:
            return DataQuality.EXCELLENT
        if coverage >= self.config.quality_good_pct:
            return DataQuality.GOOD
        if coverage >= self.config.quality_fair_pct:
            return DataQuality.FAIR
        return DataQuality.POOR

    def sample(
        self,
        snapshots: Sequence[PortfolioSnapshot],
        period: TimePeriod,
        join_date: DayLike,
        now: Optional[DayLike] = None,
    ) -> SampledHistory:
        """
        Sample snapshots for a period.

        Args:
            snapshots: Raw snapshots (any order, any number per day)
            period: Look-back period
            join_date: First day the user has data for
            now: Reference "today" (defaults to the current date)

        Returns:
            SampledHistory
        """
        today = to_day(now) if now is not None else date.today()
        joined = to_day(join_date)
        effective_start = max(period_start(period, today), joined)

        grouped = self.group_by_day(snapshots)
        window = grouped[
            (grouped.index >= pd.Timestamp(effective_start))
            & (grouped.index <= pd.Timestamp(today))
        ]

        points = []
        actual = 0
        epsilon = self.config.pl_percent_epsilon

        for day in self.sample_dates(period, today):
            if day < joined:
                points.append(SamplePoint(day, 0.0, 0.0, 0.0, is_interpolated=False))
                continue

            stamp = pd.Timestamp(day)
            interpolated = True
            if stamp in window.index:
                row = window.loc[stamp]
                interpolated = False
                actual += 1
            else:
                earlier = window.loc[:stamp]
                if len(earlier):
                    row = earlier.iloc[-1]
                elif len(window):
                    row = window.iloc[0]
                else:
                    row = None

            value = float(row["value"]) if row is not None else 0.0
            pl = float(row["pl"]) if row is not None else 0.0
            points.append(
                SamplePoint(
                    date=day,
                    value=value,
                    pl=pl,
                    pl_percent=pl_percent(value, pl, epsilon),
                    is_interpolated=interpolated,
                )
            )

        coverage = coverage_percent(actual, len(points))
        history = SampledHistory(
            period=period,
            points=points,
            actual_count=actual,
            total_count=len(points),
            coverage=coverage,
            quality=self.quality_level(coverage),
        )

        logger.debug(
            f"Sampled {period.value} history",
            extra_data={
                "snapshots": len(snapshots),
                "points": len(points),
                "actual": actual,
                "coverage": coverage,
            },
        )
        return history
