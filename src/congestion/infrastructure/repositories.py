from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from sqlalchemy import func, select
from sqlalchemy.orm import sessionmaker

from ...common.config.manager import ServiceWindow
from ...common.database.models import CounterSampleDB
from ...common.logging import setup_logger
from ..domain.entities import Sample, ShiftSummary

logger = setup_logger(__name__)


class SqlCounterSampleRepository:
    """
    Persists raw counter samples with SQLAlchemy.
    Opens one session per call.
    """
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def save(self, device_id: str, counter_name: str, occupancy: int,
             in_count: int, wait_time: float, timestamp: Optional[datetime] = None) -> CounterSampleDB:
        now = datetime.now()
        record = CounterSampleDB(
            device_id=device_id,
            counter_name=counter_name,
            occupancy=occupancy,
            in_count=in_count,
            wait_time=wait_time,
            timestamp=timestamp or now,
            created_at=now,
        )
        with self.session_factory() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            session.expunge(record)
        logger.info(
            f"Saved sample id={record.id} device={device_id} counter={counter_name} "
            f"occupancy={occupancy} in_count={in_count} wait_time={wait_time}"
        )
        return record

    def latest_by_counter(self, counter_name: str) -> Optional[CounterSampleDB]:
        return self._latest(CounterSampleDB.counter_name == counter_name)

    def latest_by_device(self, device_id: str) -> Optional[CounterSampleDB]:
        return self._latest(CounterSampleDB.device_id == device_id)

    def by_device(self, device_id: str) -> List[CounterSampleDB]:
        """Full history of one device, newest first."""
        return self._where(CounterSampleDB.device_id == device_id)

    def recent(self, limit: int = 10) -> List[CounterSampleDB]:
        stmt = (
            select(CounterSampleDB)
            .order_by(CounterSampleDB.timestamp.desc(), CounterSampleDB.id.desc())
            .limit(limit)
        )
        with self.session_factory() as session:
            rows = list(session.scalars(stmt))
            session.expunge_all()
        return rows

    def count(self) -> int:
        with self.session_factory() as session:
            return session.scalar(select(func.count()).select_from(CounterSampleDB))

    def counter_names(self) -> List[str]:
        return self._distinct(CounterSampleDB.counter_name)

    def device_ids(self) -> List[str]:
        return self._distinct(CounterSampleDB.device_id)

    def _latest(self, criterion) -> Optional[CounterSampleDB]:
        rows = self._where(criterion, limit=1)
        return rows[0] if rows else None

    def _where(self, criterion, limit: Optional[int] = None) -> List[CounterSampleDB]:
        stmt = (
            select(CounterSampleDB)
            .where(criterion)
            .order_by(CounterSampleDB.timestamp.desc(), CounterSampleDB.id.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        with self.session_factory() as session:
            rows = list(session.scalars(stmt))
            session.expunge_all()
        return rows

    def _distinct(self, column) -> List[str]:
        with self.session_factory() as session:
            return list(session.scalars(select(column).distinct().order_by(column)))


class SqlTimelineProvider:
    """
    Wait-time timeline for a window, ordered by counter then time.
    Bounds are inclusive; a missing wait time reads as 0.
    """
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def fetch(self, window_start: datetime, window_end: datetime) -> List[Sample]:
        stmt = (
            select(CounterSampleDB.counter_name, CounterSampleDB.timestamp, CounterSampleDB.wait_time)
            .where(CounterSampleDB.timestamp.between(window_start, window_end))
            .order_by(CounterSampleDB.counter_name, CounterSampleDB.timestamp, CounterSampleDB.id)
        )
        with self.session_factory() as session:
            rows = session.execute(stmt).all()

        return [
            Sample(
                counter_name=counter_name,
                timestamp=timestamp,
                wait_time_minutes=wait_time if wait_time is not None else 0.0,
            )
            for counter_name, timestamp, wait_time in rows
        ]


class SqlShiftSummaryProvider:
    """
    Footfall and peak figures per counter over the daily service windows.

    Each (counter, service window) bucket keeps its max in-count, max
    occupancy, max wait time and first timestamp. Buckets are then folded
    per counter: in-count maxima are summed, the rest take max/min.
    Samples outside every service window are ignored.
    """
    def __init__(self, session_factory: sessionmaker, service_windows: Sequence[ServiceWindow]):
        self.session_factory = session_factory
        self.service_windows = list(service_windows)

    def fetch(self, window_start: datetime, window_end: datetime) -> List[ShiftSummary]:
        stmt = (
            select(
                CounterSampleDB.counter_name,
                CounterSampleDB.timestamp,
                CounterSampleDB.in_count,
                CounterSampleDB.occupancy,
                CounterSampleDB.wait_time,
            )
            .where(CounterSampleDB.timestamp.between(window_start, window_end))
            .order_by(CounterSampleDB.counter_name, CounterSampleDB.timestamp)
        )
        with self.session_factory() as session:
            rows = session.execute(stmt).all()

        buckets: Dict[Tuple[str, int], dict] = {}
        for counter_name, timestamp, in_count, occupancy, wait_time in rows:
            window_index = self._window_index(timestamp)
            if window_index is None:
                continue
            bucket = buckets.setdefault((counter_name, window_index), {
                "max_in_count": None,
                "max_occupancy": None,
                "max_wait_time": None,
                "min_timestamp": timestamp,
            })
            bucket["max_in_count"] = _max(bucket["max_in_count"], in_count)
            bucket["max_occupancy"] = _max(bucket["max_occupancy"], occupancy)
            bucket["max_wait_time"] = _max(bucket["max_wait_time"], wait_time)
            bucket["min_timestamp"] = min(bucket["min_timestamp"], timestamp)

        per_counter = defaultdict(list)
        for (counter_name, _), bucket in buckets.items():
            per_counter[counter_name].append(bucket)

        summaries = []
        for counter_name in sorted(per_counter):
            counter_buckets = per_counter[counter_name]
            summaries.append(ShiftSummary(
                counter_name=counter_name,
                total_count=sum(b["max_in_count"] or 0 for b in counter_buckets),
                peak_queue=max((b["max_occupancy"] or 0) for b in counter_buckets),
                peak_wait_time=float(max((b["max_wait_time"] or 0.0) for b in counter_buckets)),
                period_start=min(b["min_timestamp"] for b in counter_buckets),
            ))
        return summaries

    def _window_index(self, timestamp: datetime) -> Optional[int]:
        moment = timestamp.time()
        for index, window in enumerate(self.service_windows):
            if window.contains(moment):
                return index
        return None


def _max(current, value):
    if value is None:
        return current
    if current is None:
        return value
    return max(current, value)
