from .counter import CounterMessage, CounterRecord
from .congestion import (
    CongestionBlockOut, PeakCongestionOut,
    AggregationResultOut, SessionCongestionOut
)

__all__ = [
    "CounterMessage",
    "CounterRecord",
    "CongestionBlockOut",
    "PeakCongestionOut",
    "AggregationResultOut",
    "SessionCongestionOut",
]
