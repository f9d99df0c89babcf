"""
Domain repositories for the congestion analytics module.
"""
from datetime import datetime
from typing import List, Optional, Protocol


class CounterSampleRepository(Protocol):
    """
    Store of raw counter telemetry.
    """
    def save(self, device_id: str, counter_name: str, occupancy: int,
             in_count: int, wait_time: float, timestamp: Optional[datetime] = None):
        ...

    def latest_by_counter(self, counter_name: str) -> Optional[object]:
        ...

    def latest_by_device(self, device_id: str) -> Optional[object]:
        ...

    def by_device(self, device_id: str) -> List[object]:
        ...

    def recent(self, limit: int) -> List[object]:
        ...
