"""Squad-level series built from members' sampled histories."""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from history.sampler import SamplePoint
from privacy.classifier import is_visible_in_aggregates
from privacy.settings import PrivacySettings
from utils.logger import get_history_logger

logger = get_history_logger()


@dataclass
class MemberHistory:
    """
    One member's input to the aggregator.

    Attributes:
        user_id: Member identifier
        name: Display name
        privacy: Member's effective privacy in the workspace
        points: Member's sampled series
    """

    user_id: str
    name: Optional[str]
    privacy: PrivacySettings
    points: List[SamplePoint] = field(default_factory=list)


@dataclass(frozen=True)
class MemberPoint:
    date: date
    value: float
    percent_change: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "value": self.value,
            "percentChange": self.percent_change,
        }


@dataclass(frozen=True)
class TrendPoint:
    """Per-member listing point: date and percent change, never the value."""

    date: date
    percent_change: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "percentChange": self.percent_change}


@dataclass(frozen=True)
class AveragePoint:
    date: date
    percent_change: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "percentChange": self.percent_change}


@dataclass(frozen=True)
class TotalPoint:
    date: date
    value: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date.isoformat(), "value": self.value}


@dataclass
class MemberSeries:
    """Per-member listing entry; hidden members carry an empty history."""

    user_id: str
    name: Optional[str]
    is_visible: bool
    history: List[TrendPoint] = field(default_factory=list)


@dataclass(frozen=True)
class SquadMetadata:
    total_members: int
    visible_members: int
    hidden_members: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalMembers": self.total_members,
            "visibleMembers": self.visible_members,
            "hiddenMembers": self.hidden_members,
        }


@dataclass
class SquadHistory:
    """
    Aggregator output.

    Attributes:
        squad_average: Mean percent change per date over visible members
        squad_total: Summed value per date over visible members
        members: Per-member percent-change series (empty for hidden members)
        your_history: The requesting member's own series, if they are a member
        metadata: Member visibility counts
    """

    squad_average: List[AveragePoint]
    squad_total: List[TotalPoint]
    members: List[MemberSeries]
    your_history: List[MemberPoint]
    metadata: SquadMetadata


def percent_changes(points: Sequence[SamplePoint]) -> List[MemberPoint]:
    """
    Attach percent change relative to the first positive value.

    Points before the first positive value have a change of 0.
    """
    baseline = None
    result = []
    for point in points:
        if baseline is None and point.value > 0:
            baseline = point.value
        change = (point.value - baseline) / baseline * 100 if baseline else 0.0
        result.append(MemberPoint(point.date, point.value, change))
    return result


def _member_frame(series: Dict[str, List[MemberPoint]]) -> pd.DataFrame:
    """Long-form frame of (user_id, date, value, percent_change)."""
    rows = [
        {
            "user_id": user_id,
            "date": point.date,
            "value": point.value,
            "percent_change": point.percent_change,
        }
        for user_id, points in series.items()
        for point in points
    ]
    return pd.DataFrame(rows, columns=["user_id", "date", "value", "percent_change"])


def squad_average(series: Dict[str, List[MemberPoint]]) -> List[AveragePoint]:
    """
    Mean percent change per date over members with a point at that date.

    Dates are the union of all members' dates, ascending.
    """
    frame = _member_frame(series)
    if frame.empty:
        return []
    means = frame.groupby("date", sort=True)["percent_change"].mean()
    return [AveragePoint(day, float(value)) for day, value in means.items()]


def squad_total(series: Dict[str, List[MemberPoint]]) -> List[TotalPoint]:
    """Summed value per date over members with a point at that date."""
    frame = _member_frame(series)
    if frame.empty:
        return []
    totals = frame.groupby("date", sort=True)["value"].sum()
    return [TotalPoint(day, float(value)) for day, value in totals.items()]


def aggregate(
    members: Sequence[MemberHistory],
    current_user_id: Optional[str] = None,
) -> SquadHistory:
    """
    Build squad series from members' histories, honoring privacy.

    Hidden members are counted but their points are never read.

    Args:
        members: Every member of the workspace
        current_user_id: Requesting member, whose own series is always
            returned in ``your_history``

    Returns:
        SquadHistory
    """
    visible: Dict[str, List[MemberPoint]] = {}
    listing = []
    your_history: List[MemberPoint] = []

    for member in members:
        shown = is_visible_in_aggregates(member.privacy)
        history = percent_changes(member.points) if shown else []
        if shown:
            visible[member.user_id] = history
        trend = [TrendPoint(point.date, point.percent_change) for point in history]
        listing.append(MemberSeries(member.user_id, member.name, shown, trend))

        if member.user_id == current_user_id:
            your_history = history if shown else percent_changes(member.points)

    metadata = SquadMetadata(
        total_members=len(members),
        visible_members=len(visible),
        hidden_members=len(members) - len(visible),
    )

    logger.debug(
        "Aggregated squad history",
        extra_data=metadata.to_dict(),
    )

    return SquadHistory(
        squad_average=squad_average(visible),
        squad_total=squad_total(visible),
        members=listing,
        your_history=your_history,
        metadata=metadata,
    )
