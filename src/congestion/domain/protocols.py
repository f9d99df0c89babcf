"""
Domain protocols for the congestion analytics module.
"""
from datetime import datetime
from typing import List, Protocol

from .entities import Sample, ShiftSummary


class TimelineProvider(Protocol):
    """
    Source of wait-time samples, ordered by (counter_name, timestamp).
    """
    def fetch(self, window_start: datetime, window_end: datetime) -> List[Sample]:
        ...


class ShiftSummaryProvider(Protocol):
    """
    Source of per-counter footfall/peak summaries over the service windows.
    """
    def fetch(self, window_start: datetime, window_end: datetime) -> List[ShiftSummary]:
        ...
