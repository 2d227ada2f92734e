"""Unit tests for look-back periods."""

from datetime import date

import pytest

from history.periods import TimePeriod, period_start


class TestTimePeriod:
    """Tests for TimePeriod parsing."""

    def test_parse_valid(self):
        """Test every supported code parses."""
        for code in ["1D", "1W", "1M", "3M", "6M", "1Y", "YTD"]:
            assert TimePeriod.parse(code).value == code

    @pytest.mark.parametrize("code", ["2W", "1m", "", "ALL"])
    def test_parse_invalid(self, code):
        """Test unsupported codes raise ValueError."""
        with pytest.raises(ValueError, match="Invalid period"):
            TimePeriod.parse(code)


class TestPeriodStart:
    """Tests for period_start."""

    @pytest.mark.parametrize(
        "period,expected",
        [
            (TimePeriod.ONE_DAY, date(2026, 10, 17)),
            (TimePeriod.ONE_WEEK, date(2026, 10, 11)),
            (TimePeriod.ONE_MONTH, date(2026, 9, 18)),
            (TimePeriod.THREE_MONTHS, date(2026, 7, 18)),
            (TimePeriod.SIX_MONTHS, date(2026, 4, 18)),
            (TimePeriod.ONE_YEAR, date(2025, 10, 18)),
            (TimePeriod.YEAR_TO_DATE, date(2026, 1, 1)),
        ],
    )
    def test_offsets(self, today, period, expected):
        """Test start date of each period."""
        assert period_start(period, today) == expected

    def test_month_end_clamps(self):
        """Test month offsets clamp to shorter months."""
        assert period_start(TimePeriod.ONE_MONTH, date(2026, 3, 31)) == date(2026, 2, 28)

    def test_ytd_on_new_year(self):
        """Test YTD on January 1st starts today."""
        assert period_start(TimePeriod.YEAR_TO_DATE, date(2027, 1, 1)) == date(2027, 1, 1)
