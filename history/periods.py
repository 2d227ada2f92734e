"""Look-back periods for portfolio history."""

from datetime import date
from enum import Enum

import pandas as pd


class TimePeriod(str, Enum):
    """Closed set of history periods accepted by the API."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    YEAR_TO_DATE = "YTD"

    @classmethod
    def parse(cls, raw: str) -> "TimePeriod":
        """
        Parse a period code.

        Args:
            raw: Period code such as '1M'

        Returns:
            TimePeriod

        Raises:
            ValueError: If the code is not one of the supported periods
        """
        try:
            return cls(raw)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValueError(f"Invalid period '{raw}'. Must be one of: {valid}") from None


_OFFSETS = {
    TimePeriod.ONE_DAY: pd.DateOffset(days=1),
    TimePeriod.ONE_WEEK: pd.DateOffset(days=7),
    TimePeriod.ONE_MONTH: pd.DateOffset(months=1),
    TimePeriod.THREE_MONTHS: pd.DateOffset(months=3),
    TimePeriod.SIX_MONTHS: pd.DateOffset(months=6),
    TimePeriod.ONE_YEAR: pd.DateOffset(years=1),
}


def period_start(period: TimePeriod, today: date) -> date:
    """
    First calendar day covered by a period ending on ``today``.

    Month and year offsets clamp to the end of shorter months
    (e.g. 1M before March 31 is February 28/29).

    Args:
        period: Look-back period
        today: Last day of the period

    Returns:
        Start date
    """
    if period == TimePeriod.YEAR_TO_DATE:
        return date(today.year, 1, 1)
    return (pd.Timestamp(today) - _OFFSETS[period]).date()
