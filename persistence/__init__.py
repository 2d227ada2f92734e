"""Persistence layer backed by SQLAlchemy (SQLite or PostgreSQL)."""

from persistence.store import (
    BrokerageAccount,
    SquadStore,
    User,
    Workspace,
    WorkspaceMember,
)

__all__ = [
    "BrokerageAccount",
    "SquadStore",
    "User",
    "Workspace",
    "WorkspaceMember",
]
