from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from ...common.exceptions import InvalidInputError
from ..domain.entities import CongestionBlock, Sample
from ..domain.weights import congestion_level, congestion_weight

_MINUTE = timedelta(minutes=1)


def whole_minutes(start: datetime, end: datetime) -> int:
    """Whole minutes elapsed between two instants, truncated toward zero."""
    elapsed = end - start
    if elapsed < timedelta(0):
        return -((-elapsed) // _MINUTE)
    return elapsed // _MINUTE


@dataclass
class _OpenBlock:
    """
    Block under construction. Frozen into a CongestionBlock on finalize.
    """
    weight: int
    start: datetime
    end: datetime

    def finalize(self) -> CongestionBlock:
        return CongestionBlock(
            level=congestion_level(self.weight),
            weight=self.weight,
            start=self.start,
            end=self.end,
            duration_minutes=whole_minutes(self.start, self.end),
        )


def build_congestion_blocks(samples: Sequence[Sample], skip_idle: bool = True) -> List[CongestionBlock]:
    """
    Segments one counter's ordered samples into runs of equal weight.

    With ``skip_idle`` (peak detection) weight-0 samples close the open
    block and leave no trace, so only congested time is covered. Without
    it (session breakdown) weight-0 runs become "Low" blocks and the
    blocks partition the whole sample range.

    Samples with equal timestamps are treated as consecutive readings.
    Raises InvalidInputError if the samples mix counters or go back in time.
    """
    blocks: List[CongestionBlock] = []
    current: Optional[_OpenBlock] = None
    previous: Optional[Sample] = None

    for sample in samples:
        _check_order(previous, sample)
        previous = sample

        weight = congestion_weight(sample.wait_time_minutes)

        if weight == 0 and skip_idle:
            if current is not None:
                blocks.append(current.finalize())
                current = None
            continue

        if current is None or current.weight != weight:
            if current is not None:
                blocks.append(current.finalize())
            current = _OpenBlock(weight=weight, start=sample.timestamp, end=sample.timestamp)

        current.end = sample.timestamp

    if current is not None:
        blocks.append(current.finalize())

    return blocks


def _check_order(previous: Optional[Sample], sample: Sample):
    if previous is None:
        return
    if sample.counter_name != previous.counter_name:
        raise InvalidInputError(
            f"Samples mix counters {previous.counter_name!r} and {sample.counter_name!r}"
        )
    if sample.timestamp < previous.timestamp:
        raise InvalidInputError(
            f"Samples for {sample.counter_name!r} are out of order at {sample.timestamp}"
        )
