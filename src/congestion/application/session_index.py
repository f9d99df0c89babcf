from typing import Sequence

from ...common.exceptions import InvalidWindowError
from ..domain.entities import CongestionBlock
from ..domain.weights import MAX_WEIGHT


def weighted_congestion_index(
    blocks: Sequence[CongestionBlock],
    session_minutes: int,
    max_weight: int = MAX_WEIGHT,
) -> float:
    """
    Duration-weighted severity as a percentage of the theoretical maximum,
    i.e. the whole session spent at ``max_weight``.
    """
    if session_minutes <= 0:
        raise InvalidWindowError(
            f"Session must span at least one minute, got {session_minutes}"
        )

    weighted_sum = sum(b.weight * b.duration_minutes for b in blocks)
    return (weighted_sum / (session_minutes * max_weight)) * 100
