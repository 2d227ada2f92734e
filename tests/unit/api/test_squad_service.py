"""Unit tests for SquadService."""

import pytest

from api.middleware.error_handler import ForbiddenError, NotFoundError
from api.services.squad_service import SquadService
from history.periods import TimePeriod


@pytest.fixture
def service(seeded_squad):
    return SquadService(seeded_squad["store"])


class TestLeaderboard:
    """Tests for the privacy-formatted leaderboard."""

    def test_only_exact_visible_members_ranked(self, service):
        board = service.get_leaderboard("squad1", "bob")

        assert [e.user_id for e in board.entries] == ["alice", "bob", "carol"]
        assert board.entries[0].rank == 1
        assert board.entries[1].rank is None
        assert board.entries[2].rank is None
        assert board.stats.total_members == 3
        assert board.stats.ranked_members == 1

    def test_full_member(self, service):
        alice = service.get_leaderboard("squad1", "bob").entries[0]

        assert alice.disclosure_tier == "full"
        assert alice.portfolio_value.exact == 19_000.0
        assert alice.portfolio_value.display == "$19,000.00"
        assert alice.performance.change == 1_000.0
        assert alice.positions[0].quantity == 100
        assert alice.is_current_user is False

    def test_partial_member(self, service):
        bob = service.get_leaderboard("squad1", "bob").entries[1]

        assert bob.disclosure_tier == "partial"
        assert bob.is_current_user is True
        assert bob.portfolio_value.exact is None
        assert bob.portfolio_value.display == "$20K-$30K"
        assert bob.portfolio_value.range.min == 20_000
        assert bob.performance.change is None
        assert bob.performance.change_percent == pytest.approx(-500 / 21_000 * 100)
        assert bob.positions[0].symbol == "MSFT"
        assert bob.positions[0].quantity is None
        assert bob.position_count == 1

    def test_hidden_member(self, service):
        carol = service.get_leaderboard("squad1", "bob").entries[2]

        assert carol.disclosure_tier == "hidden"
        assert carol.portfolio_value.display == "Hidden"
        assert carol.portfolio_value.exact is None
        assert carol.portfolio_value.range is None
        assert carol.performance.change is None
        assert carol.positions == []
        assert carol.position_count == 0

    def test_approximate_value_not_recoverable(self, service):
        """Test no entry pairs a dollar change with a percent beside a non-exact value."""
        for entry in service.get_leaderboard("squad1", "alice").entries:
            if entry.portfolio_value.exact is None:
                assert entry.performance.change is None

    def test_stats_use_disclosed_values_only(self, service):
        stats = service.get_leaderboard("squad1", "alice").stats

        assert stats.combined_value == 19_000.0
        expected = (1_000 / 19_000 * 100 + -500 / 21_000 * 100) / 2
        assert stats.average_return == pytest.approx(expected)

    def test_outsider_forbidden(self, service):
        with pytest.raises(ForbiddenError):
            service.get_leaderboard("squad1", "dave")

    def test_unknown_workspace(self, service):
        with pytest.raises(NotFoundError):
            service.get_leaderboard("nope", "alice")


class TestActivityFeed:
    """Tests for the privacy-filtered activity feed."""

    def test_filtering_and_redaction(self, service):
        feed = service.get_activity("squad1", "alice")
        by_id = {item.id: item for item in feed.items}

        assert [item.id for item in feed.items] == ["a1", "b1", "c2"]
        assert by_id["a1"].value == 1_900.0
        assert by_id["a1"].privacy_level == "full"
        assert by_id["b1"].quantity is None
        assert by_id["b1"].symbol == "AAPL"
        assert by_id["b1"].privacy_level == "partial"
        assert by_id["c2"].value is None
        assert by_id["c2"].privacy_level == "hidden"
        assert by_id["c2"].user_name == "Carol"

    def test_pagination_after_filtering(self, service):
        feed = service.get_activity("squad1", "alice", limit=2, offset=0)
        assert feed.total == 3
        assert len(feed.items) == 2
        assert feed.has_more is True

        last = service.get_activity("squad1", "alice", limit=2, offset=2)
        assert [item.id for item in last.items] == ["c2"]
        assert last.has_more is False

    def test_outsider_forbidden(self, service):
        with pytest.raises(ForbiddenError):
            service.get_activity("squad1", "dave")


class TestSquadHistory:
    """Tests for aggregated squad history."""

    def test_metadata_and_hidden_series(self, service, today):
        history = service.get_squad_history("squad1", "alice", TimePeriod.ONE_MONTH, today=today)

        assert history.metadata.total_members == 3
        assert history.metadata.visible_members == 2
        assert history.metadata.hidden_members == 1

        carol = next(m for m in history.members if m.user_id == "carol")
        assert carol.is_visible is False
        assert carol.history == []

    def test_member_listing_has_no_values(self, service, today):
        history = service.get_squad_history("squad1", "alice", TimePeriod.ONE_MONTH, today=today)
        bob = next(m for m in history.members if m.user_id == "bob")

        assert bob.is_visible is True
        assert len(bob.history) == 5
        for point in bob.history:
            assert set(point.model_dump()) == {"date", "percent_change"}

    def test_totals_from_visible_members(self, service, today):
        history = service.get_squad_history("squad1", "alice", TimePeriod.ONE_MONTH, today=today)

        last = history.squad_total[-1]
        assert last.date == today
        # alice 104,000 + bob 49,000 on the final day
        assert last.value == pytest.approx(153_000.0)
        assert len(history.squad_total) == 5

    def test_hidden_caller_sees_own_history(self, service, today):
        history = service.get_squad_history("squad1", "carol", TimePeriod.ONE_MONTH, today=today)

        assert history.your_history
        assert history.your_history[-1].value == pytest.approx(254_000.0)
        assert all(p.value < 200_000 for p in history.squad_total)
