"""
Portfolio records mirrored from connected brokerage accounts.

Holdings, daily value snapshots and workspace activity entries are the
raw inputs the privacy and history engines read.
"""

from portfolio.activity import Activity, ActivityType
from portfolio.position import Holding, PositionTicker
from portfolio.snapshot import PortfolioSnapshot

__all__ = [
    "Activity",
    "ActivityType",
    "Holding",
    "PortfolioSnapshot",
    "PositionTicker",
]
