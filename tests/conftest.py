"""Pytest configuration and shared fixtures."""

import os
import sys
import tempfile
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# api.main builds the app at import time and needs a database URL
os.environ.setdefault(
    "DATABASE_URL",
    f"sqlite:///{Path(tempfile.gettempdir()) / 'squadfolio_test_default.db'}",
)

from persistence.store import BrokerageAccount, SquadStore, User, Workspace  # noqa: E402
from portfolio.activity import Activity, ActivityType  # noqa: E402
from portfolio.position import Holding  # noqa: E402
from portfolio.snapshot import PortfolioSnapshot  # noqa: E402
from privacy.levels import (  # noqa: E402
    ActivityLevel,
    PerformanceLevel,
    PortfolioValueLevel,
    PositionsLevel,
    WatchlistLevel,
)
from privacy.settings import PrivacySettings, WorkspacePrivacyPolicy  # noqa: E402

TODAY = date(2026, 10, 18)


@pytest.fixture
def today():
    """Fixed reference day for history tests."""
    return TODAY


@pytest.fixture
def default_settings():
    """The safe defaults new users start with."""
    return PrivacySettings()


@pytest.fixture
def full_disclosure():
    """Settings sharing everything."""
    return PrivacySettings.maximum()


@pytest.fixture
def store(tmp_path):
    """SquadStore backed by a temporary SQLite file."""
    store = SquadStore(database_url=f"sqlite:///{tmp_path / 'squadfolio.db'}")
    yield store
    store.close()


def _connected_on(day: date) -> datetime:
    return datetime(day.year, day.month, day.day, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def seeded_squad(store):
    """
    A workspace with three members sharing at different levels.

    - alice: full disclosure (rankable)
    - bob: approximate value, visible performance (partial)
    - carol: hidden value and performance (hidden from aggregates)
    """
    alice = store.save_user(User(id="alice", name="Alice", privacy_defaults=PrivacySettings.maximum()))
    bob = store.save_user(User(id="bob", name="Bob"))
    carol = store.save_user(
        User(
            id="carol",
            name="Carol",
            privacy_defaults=PrivacySettings(
                portfolio_value=PortfolioValueLevel.HIDDEN,
                performance=PerformanceLevel.HIDDEN,
                positions=PositionsLevel.HIDDEN,
                activity=ActivityLevel.HIDDEN,
                watchlist=WatchlistLevel.HIDDEN,
            ),
        )
    )
    outsider = store.save_user(User(id="dave", name="Dave"))

    workspace_id = store.save_workspace(
        Workspace(id="squad1", name="Squad One", owner_id=alice, privacy_policy=WorkspacePrivacyPolicy())
    )
    joined = _connected_on(TODAY - timedelta(days=60))
    store.add_member(workspace_id, alice, role="owner", joined_at=joined)
    store.add_member(workspace_id, bob, joined_at=joined + timedelta(minutes=1))
    store.add_member(workspace_id, carol, joined_at=joined + timedelta(minutes=2))

    start = TODAY - timedelta(days=40)
    accounts = {}
    for user_id, base in ((alice, 100_000.0), (bob, 45_000.0), (carol, 250_000.0)):
        account_id = store.save_account(
            BrokerageAccount(id=f"{user_id}-acct", user_id=user_id),
            created_at=_connected_on(start),
        )
        accounts[user_id] = account_id
        for offset in range(0, 41):
            day = start + timedelta(days=offset)
            store.save_snapshot(
                PortfolioSnapshot(
                    date=day,
                    value=base + offset * 100.0,
                    pl=offset * 100.0,
                    account_id=account_id,
                )
            )

    store.save_holding(
        Holding(symbol="AAPL", security_name="Apple Inc.", security_type="equity",
                quantity=100, price=190.0, market_value=19_000.0, unrealized_pl=1_000.0,
                account_id=accounts[alice])
    )
    store.save_holding(
        Holding(symbol="MSFT", security_name="Microsoft Corp.", security_type="equity",
                quantity=50, price=420.0, market_value=21_000.0, unrealized_pl=-500.0,
                account_id=accounts[bob])
    )
    store.save_holding(
        Holding(symbol="NVDA", security_name="NVIDIA Corp.", security_type="equity",
                quantity=400, price=125.0, market_value=50_000.0, unrealized_pl=5_000.0,
                account_id=accounts[carol])
    )

    base_time = _connected_on(TODAY)
    entries = [
        ("a1", alice, ActivityType.TRADE_BUY, 0),
        ("b1", bob, ActivityType.TRADE_SELL, 1),
        ("c1", carol, ActivityType.TRADE_BUY, 2),
        ("c2", carol, ActivityType.MILESTONE_ATH, 3),
    ]
    for activity_id, user_id, activity_type, minutes in entries:
        store.save_activity(
            Activity(
                id=activity_id,
                workspace_id=workspace_id,
                user_id=user_id,
                type=activity_type,
                created_at=base_time - timedelta(minutes=minutes),
                symbol="AAPL",
                quantity=10.0,
                price=190.0,
                value=1_900.0,
                message=f"{user_id} {activity_type.value}",
            )
        )

    return {
        "store": store,
        "workspace_id": workspace_id,
        "alice": alice,
        "bob": bob,
        "carol": carol,
        "outsider": outsider,
        "accounts": accounts,
    }
