"""
Portfolio history sampling and squad aggregation.

Snapshots are sampled onto an evenly spaced grid per look-back period,
then visible members' series are combined into squad totals and averages.
"""

from history.aggregator import MemberHistory, SquadHistory, aggregate
from history.periods import TimePeriod, period_start
from history.sampler import (
    DataQuality,
    SampledHistory,
    SamplePoint,
    TimeSeriesSampler,
    pl_percent,
    resolve_join_date,
)

__all__ = [
    "DataQuality",
    "MemberHistory",
    "SampledHistory",
    "SamplePoint",
    "SquadHistory",
    "TimePeriod",
    "TimeSeriesSampler",
    "aggregate",
    "period_start",
    "pl_percent",
    "resolve_join_date",
]
