"""History sampling configuration."""

from typing import Dict

from pydantic import Field, field_validator

from config.base import BaseConfig

# Number of evenly spaced points per look-back period
DEFAULT_SAMPLE_POINTS: Dict[str, int] = {
    "1D": 2,
    "1W": 7,
    "1M": 5,
    "3M": 13,
    "6M": 26,
    "1Y": 12,
    "YTD": 12,
}


class HistoryConfig(BaseConfig):
    """
    Configuration for time-series sampling.

    Defines how many points each look-back period is sampled into,
    the guard used for P&L percentages, and data-quality thresholds.
    """

    sample_points: Dict[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_SAMPLE_POINTS),
        description="Sample count per period; missing periods use the defaults",
    )
    pl_percent_epsilon: float = Field(
        default=0.01,
        description="Cost basis magnitude below which P&L percent is reported as 0",
        ge=0.0,
    )

    # Data quality thresholds (coverage percentage)
    quality_excellent_pct: int = Field(default=80, ge=0, le=100)
    quality_good_pct: int = Field(default=60, ge=0, le=100)
    quality_fair_pct: int = Field(default=40, ge=0, le=100)

    @field_validator("sample_points")
    @classmethod
    def validate_sample_points(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Merge overrides onto the defaults and reject unknown periods."""
        unknown = set(v) - set(DEFAULT_SAMPLE_POINTS)
        if unknown:
            raise ValueError(f"Unknown periods in sample_points: {sorted(unknown)}")
        for period, count in v.items():
            if count < 2:
                raise ValueError(f"sample_points[{period}] must be >= 2, got {count}")
        merged = dict(DEFAULT_SAMPLE_POINTS)
        merged.update(v)
        return merged

    @field_validator("quality_fair_pct")
    @classmethod
    def validate_threshold_order(cls, v: int, info) -> int:
        """Ensure quality thresholds descend excellent > good > fair."""
        good = info.data.get("quality_good_pct")
        excellent = info.data.get("quality_excellent_pct")
        if good is not None and excellent is not None and not (excellent >= good >= v):
            raise ValueError("quality thresholds must satisfy excellent >= good >= fair")
        return v

    def points_for(self, period: str) -> int:
        """
        Get sample count for a period.

        Args:
            period: Period code (e.g. '1M')

        Returns:
            Number of sample points
        """
        return self.sample_points[period]
