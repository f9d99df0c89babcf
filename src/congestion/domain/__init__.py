"""
Domain module initialization.
"""
from .entities import (
    CongestionLevel,
    Sample,
    CongestionBlock,
    PeakCongestion,
    ShiftSummary,
    AggregationResult,
    SessionCongestion
)
from .protocols import TimelineProvider, ShiftSummaryProvider
from .repositories import CounterSampleRepository
from .weights import MAX_WEIGHT, congestion_weight, congestion_level
