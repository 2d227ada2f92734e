"""Brokerage holdings mirrored from connected accounts."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Holding:
    """
    A position held in a connected brokerage account.

    Attributes:
        symbol: Ticker symbol (e.g., 'AAPL')
        security_name: Display name of the security
        security_type: Security class (e.g., 'equity', 'etf')
        quantity: Number of units held
        price: Latest price per unit
        market_value: quantity * price as reported by the brokerage
        unrealized_pl: Open profit/loss in USD
        account_id: Brokerage account holding the position

    Example:
        >>> holding = Holding(
        ...     symbol='AAPL',
        ...     security_name='Apple Inc.',
        ...     security_type='equity',
        ...     quantity=10,
        ...     price=190.0,
        ...     market_value=1900.0,
        ...     unrealized_pl=150.0,
        ... )
    """

    symbol: str
    security_name: Optional[str] = None
    security_type: Optional[str] = None
    quantity: float = 0.0
    price: float = 0.0
    market_value: float = 0.0
    unrealized_pl: float = 0.0
    account_id: Optional[str] = None

    def __post_init__(self):
        """Validate holding fields."""
        if not self.symbol:
            raise ValueError("Holding symbol must not be empty")

    def to_ticker(self) -> "PositionTicker":
        """Project to the ticker-only view."""
        return PositionTicker(
            symbol=self.symbol,
            security_name=self.security_name,
            security_type=self.security_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert holding to the camelCase wire shape."""
        return {
            "symbol": self.symbol,
            "securityName": self.security_name,
            "securityType": self.security_type,
            "quantity": self.quantity,
            "price": self.price,
            "marketValue": self.market_value,
            "unrealizedPL": self.unrealized_pl,
        }

    def __repr__(self) -> str:
        """String representation of holding."""
        return f"Holding({self.symbol}, qty={self.quantity:g}, ${self.market_value:,.2f})"


@dataclass(frozen=True)
class PositionTicker:
    """A holding reduced to its identifying fields."""

    symbol: str
    security_name: Optional[str] = None
    security_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "symbol": self.symbol,
            "securityName": self.security_name,
            "securityType": self.security_type,
        }
