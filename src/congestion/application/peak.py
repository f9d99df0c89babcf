from typing import Optional, Sequence

from ..domain.entities import CongestionBlock, PeakCongestion, Sample


def select_peak_congestion(
    blocks: Sequence[CongestionBlock],
    samples: Sequence[Sample],
) -> Optional[PeakCongestion]:
    """
    Picks the worst block: highest weight first, then longest duration.
    On a full tie the earliest block wins. Returns None when there was
    no congestion at all.
    """
    if not blocks:
        return None

    peak = max(blocks, key=lambda b: (b.weight, b.duration_minutes))

    waits = [
        s.wait_time_minutes
        for s in samples
        if peak.start <= s.timestamp <= peak.end
    ]

    return PeakCongestion(
        level=peak.level,
        weight=peak.weight,
        start=peak.start,
        end=peak.end,
        duration_minutes=peak.duration_minutes,
        peak_wait_time_in_block=max(waits) if waits else 0.0,
    )
