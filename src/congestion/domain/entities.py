"""
Domain entities for the congestion analytics module.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from ...common.exceptions import InvalidInputError


class CongestionLevel(str, Enum):
    """
    Textual severity label. Values are part of the serialized contract.
    """
    LOW = "Low"
    HIGH = "High"
    CRITICAL = "Critical"
    SEVERE = "Severe"
    EXTREME = "Extreme"


@dataclass(frozen=True)
class Sample:
    """
    One wait-time reading of a service counter.
    """
    counter_name: str
    timestamp: datetime
    wait_time_minutes: float

    def __post_init__(self):
        if not self.counter_name:
            raise InvalidInputError("Sample is missing a counter name")
        if not isinstance(self.timestamp, datetime):
            raise InvalidInputError(f"Sample timestamp must be a datetime, got {self.timestamp!r}")
        if isinstance(self.wait_time_minutes, bool) or not isinstance(self.wait_time_minutes, (int, float)):
            raise InvalidInputError(f"Wait time must be a number, got {self.wait_time_minutes!r}")
        if not math.isfinite(self.wait_time_minutes):
            raise InvalidInputError(
                f"Wait time for {self.counter_name} at {self.timestamp} is not finite"
            )


@dataclass(frozen=True)
class CongestionBlock:
    """
    Maximal run of consecutive samples sharing one weight.
    """
    level: CongestionLevel
    weight: int
    start: datetime
    end: datetime
    duration_minutes: int


@dataclass(frozen=True)
class PeakCongestion(CongestionBlock):
    """
    The dominant block of a window plus the worst wait time inside it.
    """
    peak_wait_time_in_block: float = 0.0


@dataclass(frozen=True)
class ShiftSummary:
    """
    Per-counter footfall and peak figures over the daily service windows.
    """
    counter_name: str
    total_count: int
    peak_queue: int
    peak_wait_time: float
    period_start: datetime


@dataclass(frozen=True)
class AggregationResult:
    """
    Shift summary of one counter merged with its peak congestion, if any.
    """
    counter_name: str
    total_count: int
    peak_queue: int
    peak_wait_time: float
    period_start: datetime
    peak_congestion: Optional[PeakCongestion] = None


@dataclass(frozen=True)
class SessionCongestion:
    """
    Weighted congestion index of one counter over a session window.
    """
    counter_name: str
    weighted_congestion_index: float  # percentage
    session_minutes: int
    blocks: List[CongestionBlock] = field(default_factory=list)
