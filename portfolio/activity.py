"""Workspace activity feed entries."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional


class ActivityType(str, Enum):
    """Kinds of entries posted to a workspace feed."""

    TRADE_BUY = "TRADE_BUY"
    TRADE_SELL = "TRADE_SELL"
    POSITION_OPENED = "POSITION_OPENED"
    POSITION_CLOSED = "POSITION_CLOSED"
    POSITION_INCREASED = "POSITION_INCREASED"
    POSITION_DECREASED = "POSITION_DECREASED"
    MILESTONE_ATH = "MILESTONE_ATH"
    MILESTONE_VALUE = "MILESTONE_VALUE"
    MILESTONE_RETURN = "MILESTONE_RETURN"
    IDEA_SHARED = "IDEA_SHARED"
    IDEA_OUTCOME = "IDEA_OUTCOME"
    WATCHLIST_ADD = "WATCHLIST_ADD"
    ACHIEVEMENT = "ACHIEVEMENT"

    @property
    def is_milestone(self) -> bool:
        """Milestones and achievements are shown regardless of activity privacy."""
        return self.value.startswith("MILESTONE_") or self is ActivityType.ACHIEVEMENT


@dataclass
class Activity:
    """
    One entry in a workspace activity feed.

    Attributes:
        id: Activity identifier
        workspace_id: Workspace the entry was posted to
        user_id: Member the entry is about
        type: Activity type
        created_at: When the entry was created
        symbol: Ticker involved, if any
        quantity: Units traded, if any
        price: Price per unit, if any
        value: Dollar amount, if any
        message: Pre-rendered feed text
        metadata: Free-form extra fields
    """

    id: str
    workspace_id: str
    user_id: str
    type: ActivityType
    created_at: datetime
    symbol: Optional[str] = None
    quantity: Optional[float] = None
    price: Optional[float] = None
    value: Optional[float] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert activity to dictionary for serialization."""
        return {
            "id": self.id,
            "workspaceId": self.workspace_id,
            "userId": self.user_id,
            "type": self.type.value,
            "createdAt": self.created_at.isoformat(),
            "symbol": self.symbol,
            "quantity": self.quantity,
            "price": self.price,
            "value": self.value,
            "message": self.message,
            "metadata": self.metadata,
        }
