"""Daily portfolio value snapshots."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class PortfolioSnapshot:
    """
    Total value and profit/loss of one account on one day.

    Several snapshots may share a date when a user has more than one
    connected account; the sampler sums them per day.

    Attributes:
        date: Calendar day of the snapshot
        value: Total account value in USD
        pl: Total profit/loss in USD
        account_id: Brokerage account the snapshot belongs to
    """

    date: date
    value: float
    pl: float = 0.0
    account_id: Optional[str] = None
