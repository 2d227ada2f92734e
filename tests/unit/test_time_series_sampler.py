"""Unit tests for the time-series sampler."""

from datetime import date, datetime, timedelta, timezone

import pytest

from config.history import HistoryConfig
from history.periods import TimePeriod
from history.sampler import (
    DataQuality,
    TimeSeriesSampler,
    coverage_percent,
    pl_percent,
    resolve_join_date,
    to_day,
)
from portfolio.snapshot import PortfolioSnapshot


@pytest.fixture
def sampler():
    return TimeSeriesSampler()


class TestSampleDates:
    """Tests for the sampling grid."""

    def test_default_month_grid(self, sampler, today):
        """Test the default 1M grid of five days ending today."""
        assert sampler.sample_dates(TimePeriod.ONE_MONTH, today) == [
            date(2026, 9, 18),
            date(2026, 9, 25),
            date(2026, 10, 3),
            date(2026, 10, 10),
            date(2026, 10, 18),
        ]

    def test_one_day(self, sampler, today):
        """Test 1D samples yesterday and today."""
        assert sampler.sample_dates(TimePeriod.ONE_DAY, today) == [date(2026, 10, 17), today]

    def test_one_week_daily(self, sampler, today):
        """Test 1W grid has distinct days and ends today."""
        dates = sampler.sample_dates(TimePeriod.ONE_WEEK, today)
        assert len(dates) == 7
        assert len(set(dates)) == 7
        assert dates[-1] == today
        assert dates == sorted(dates)

    def test_ytd_on_new_year(self, sampler):
        """Test a period starting today collapses to a single day."""
        day = date(2027, 1, 1)
        assert sampler.sample_dates(TimePeriod.YEAR_TO_DATE, day) == [day]

    def test_configured_count(self, today):
        """Test sample counts come from config."""
        sampler = TimeSeriesSampler(HistoryConfig(sample_points={"1M": 12}))
        assert len(sampler.sample_dates(TimePeriod.ONE_MONTH, today)) == 12


class TestGroupByDay:
    """Tests for same-day aggregation."""

    def test_sums_accounts(self, sampler):
        """Test snapshots of several accounts on one day are summed."""
        day = date(2026, 10, 1)
        grouped = sampler.group_by_day(
            [
                PortfolioSnapshot(day, 1_000.0, 100.0, "a"),
                PortfolioSnapshot(day, 2_000.0, -50.0, "b"),
                PortfolioSnapshot(day + timedelta(days=1), 500.0, 0.0, "a"),
            ]
        )
        assert len(grouped) == 2
        assert grouped.iloc[0]["value"] == 3_000.0
        assert grouped.iloc[0]["pl"] == 50.0

    def test_empty(self, sampler):
        """Test no snapshots gives an empty frame."""
        assert sampler.group_by_day([]).empty


class TestSample:
    """Tests for TimeSeriesSampler.sample."""

    def test_coverage_three_of_twelve(self, today):
        """Test three real snapshots in a twelve-point month give coverage 25."""
        sampler = TimeSeriesSampler(HistoryConfig(sample_points={"1M": 12}))
        grid = sampler.sample_dates(TimePeriod.ONE_MONTH, today)
        snapshots = [
            PortfolioSnapshot(grid[0], 10_000.0, 0.0),
            PortfolioSnapshot(grid[5], 11_000.0, 1_000.0),
            PortfolioSnapshot(grid[11], 12_000.0, 2_000.0),
        ]

        history = sampler.sample(snapshots, TimePeriod.ONE_MONTH, today - timedelta(days=90), now=today)

        assert history.total_count == 12
        assert history.actual_count == 3
        assert history.coverage == 25
        assert history.quality is DataQuality.POOR
        real = [p for p in history.points if not p.is_interpolated]
        assert [p.date for p in real] == [grid[0], grid[5], grid[11]]

    def test_pre_join_points_are_zero(self, sampler, today):
        """Test days before the join date are zero and not interpolated."""
        joined = today - timedelta(days=5)
        snapshots = [
            # Before the join date: never used
            PortfolioSnapshot(date(2026, 10, 3), 99_999.0, 9_999.0),
            PortfolioSnapshot(joined, 20_000.0, 500.0),
            PortfolioSnapshot(today, 21_000.0, 1_500.0),
        ]

        history = sampler.sample(snapshots, TimePeriod.ONE_MONTH, joined, now=today)

        before = [p for p in history.points if p.date < joined]
        assert len(before) == 4
        for point in before:
            assert point.value == 0.0
            assert point.pl == 0.0
            assert point.pl_percent == 0.0
            assert point.is_interpolated is False

        last = history.points[-1]
        assert last.date == today
        assert last.value == 21_000.0
        assert last.is_interpolated is False
        assert history.actual_count == 1

    def test_backward_then_forward_fill(self, sampler, today):
        """Test gaps fill from the previous snapshot, else the next one."""
        snapshots = [PortfolioSnapshot(date(2026, 9, 20), 5_000.0, 0.0)]

        history = sampler.sample(snapshots, TimePeriod.ONE_MONTH, date(2025, 1, 1), now=today)

        assert all(p.is_interpolated for p in history.points)
        assert all(p.value == 5_000.0 for p in history.points)
        assert history.actual_count == 0
        assert history.coverage == 0

    def test_fill_uses_nearest_earlier(self, sampler, today):
        """Test a gap takes the closest earlier day, not an older one."""
        snapshots = [
            PortfolioSnapshot(date(2026, 9, 19), 1_000.0, 0.0),
            PortfolioSnapshot(date(2026, 10, 9), 2_000.0, 0.0),
            PortfolioSnapshot(date(2026, 10, 10), 3_000.0, 0.0),
        ]

        history = sampler.sample(snapshots, TimePeriod.ONE_MONTH, date(2025, 1, 1), now=today)
        by_day = {p.date: p for p in history.points}

        assert by_day[date(2026, 9, 18)].value == 1_000.0  # forward fill
        assert by_day[date(2026, 10, 3)].value == 1_000.0
        assert by_day[date(2026, 10, 10)].value == 3_000.0
        assert by_day[date(2026, 10, 10)].is_interpolated is False
        assert by_day[today].value == 3_000.0

    def test_snapshots_before_period_ignored(self, sampler, today):
        """Test snapshots older than the period never fill gaps."""
        snapshots = [PortfolioSnapshot(date(2026, 8, 1), 7_000.0, 0.0)]

        history = sampler.sample(snapshots, TimePeriod.ONE_MONTH, date(2025, 1, 1), now=today)

        assert all(p.value == 0.0 for p in history.points)
        assert all(p.is_interpolated for p in history.points)

    def test_future_snapshots_ignored(self, sampler, today):
        """Test snapshots after today are not sampled."""
        snapshots = [PortfolioSnapshot(today + timedelta(days=3), 7_000.0, 0.0)]
        history = sampler.sample(snapshots, TimePeriod.ONE_WEEK, date(2025, 1, 1), now=today)
        assert all(p.value == 0.0 for p in history.points)

    def test_no_snapshots(self, sampler, today):
        """Test an empty history is all zero and interpolated."""
        history = sampler.sample([], TimePeriod.ONE_WEEK, date(2025, 1, 1), now=today)
        assert history.total_count == 7
        assert history.coverage == 0
        assert all(p.value == 0.0 and p.is_interpolated for p in history.points)

    def test_same_day_accounts_summed(self, sampler, today):
        """Test multiple accounts on a sampled day are summed."""
        snapshots = [
            PortfolioSnapshot(today, 1_000.0, 100.0, "a"),
            PortfolioSnapshot(today, 4_000.0, 400.0, "b"),
        ]
        history = sampler.sample(snapshots, TimePeriod.ONE_DAY, date(2025, 1, 1), now=today)

        last = history.points[-1]
        assert last.value == 5_000.0
        assert last.pl == 500.0
        assert last.pl_percent == pytest.approx(500.0 / 4_500.0 * 100)

    def test_pure(self, sampler, today):
        """Test sampling twice gives equal results."""
        snapshots = [PortfolioSnapshot(today - timedelta(days=2), 1_000.0, 10.0)]
        first = sampler.sample(snapshots, TimePeriod.ONE_WEEK, date(2025, 1, 1), now=today)
        second = sampler.sample(snapshots, TimePeriod.ONE_WEEK, date(2025, 1, 1), now=today)
        assert first == second


class TestHelpers:
    """Tests for sampler helper functions."""

    def test_pl_percent(self):
        """Test P&L relative to cost basis."""
        assert pl_percent(110.0, 10.0) == pytest.approx(10.0)
        assert pl_percent(90.0, -10.0) == pytest.approx(-10.0)

    def test_pl_percent_degenerate(self):
        """Test near-zero basis and non-finite results give 0."""
        assert pl_percent(100.0, 100.0) == 0.0
        assert pl_percent(100.005, 100.0) == 0.0
        assert pl_percent(float("inf"), float("inf")) == 0.0
        assert pl_percent(float("nan"), 1.0) == 0.0

    def test_coverage_rounding(self):
        """Test coverage rounds halves up and handles empty series."""
        assert coverage_percent(3, 12) == 25
        assert coverage_percent(1, 8) == 13
        assert coverage_percent(2, 3) == 67
        assert coverage_percent(0, 0) == 0

    @pytest.mark.parametrize(
        "coverage,expected",
        [
            (100, DataQuality.EXCELLENT),
            (80, DataQuality.EXCELLENT),
            (79, DataQuality.GOOD),
            (60, DataQuality.GOOD),
            (40, DataQuality.FAIR),
            (39, DataQuality.POOR),
        ],
    )
    def test_quality_level(self, sampler, coverage, expected):
        assert sampler.quality_level(coverage) is expected

    def test_resolve_join_date(self, today):
        """Test the earlier known date wins, else today."""
        connected = datetime(2026, 5, 2, 23, 30, tzinfo=timezone.utc)
        assert resolve_join_date(connected, date(2026, 6, 1)) == date(2026, 5, 2)
        assert resolve_join_date(None, date(2026, 6, 1)) == date(2026, 6, 1)
        assert resolve_join_date(None, None, today=today) == today

    def test_to_day_converts_to_utc(self):
        """Test aware timestamps are bucketed by their UTC day."""
        stamp = datetime(2026, 10, 18, 1, 0, tzinfo=timezone(timedelta(hours=5)))
        assert to_day(stamp) == date(2026, 10, 17)
        assert to_day("2026-10-18") == date(2026, 10, 18)
