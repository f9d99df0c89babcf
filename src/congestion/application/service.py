from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Sequence

from ...common.exceptions import InvalidWindowError
from ...common.logging import setup_logger, log_execution_time
from ..domain.entities import AggregationResult, Sample, SessionCongestion
from ..domain.protocols import ShiftSummaryProvider, TimelineProvider
from .blocks import build_congestion_blocks, whole_minutes
from .peak import select_peak_congestion
from .session_index import weighted_congestion_index

logger = setup_logger(__name__)


def group_by_counter(samples: Sequence[Sample]) -> Dict[str, List[Sample]]:
    """
    Groups samples per counter, keeping first-seen counter order and the
    original sample order inside each group.
    """
    grouped: Dict[str, List[Sample]] = defaultdict(list)
    for sample in samples:
        grouped[sample.counter_name].append(sample)
    return dict(grouped)


class CongestionAggregationService:
    """
    Turns counter timelines into peak congestion and session indexes.
    Stateless: every call works on one snapshot fetched from the providers.
    """
    def __init__(self, timeline_provider: TimelineProvider, shift_summary_provider: ShiftSummaryProvider):
        self.timeline_provider = timeline_provider
        self.shift_summary_provider = shift_summary_provider

    @log_execution_time(logger)
    def aggregate_for_window(self, window_start: datetime, window_end: datetime) -> List[AggregationResult]:
        """
        Shift summary per active counter, each with its dominant congestion
        block over the window. Counters that never left weight 0 get
        ``peak_congestion=None``.
        """
        _check_window(window_start, window_end)

        summaries = self.shift_summary_provider.fetch(window_start, window_end)
        timelines = group_by_counter(self.timeline_provider.fetch(window_start, window_end))

        results = []
        for summary in summaries:
            samples = timelines.get(summary.counter_name, [])
            blocks = build_congestion_blocks(samples, skip_idle=True)
            peak = select_peak_congestion(blocks, samples)

            results.append(AggregationResult(
                counter_name=summary.counter_name,
                total_count=summary.total_count,
                peak_queue=summary.peak_queue,
                peak_wait_time=summary.peak_wait_time,
                period_start=summary.period_start,
                peak_congestion=peak,
            ))

        logger.info(
            f"Aggregated {len(results)} counters for {window_start:%Y-%m-%d %H:%M} - {window_end:%Y-%m-%d %H:%M}"
        )
        return results

    @log_execution_time(logger)
    def compute_session_congestion(self, window_start: datetime, window_end: datetime) -> List[SessionCongestion]:
        """
        Weighted congestion index for every counter with at least one sample
        in the window. The session length is shared by all counters.
        """
        _check_window(window_start, window_end)
        session_minutes = whole_minutes(window_start, window_end)
        if session_minutes <= 0:
            raise InvalidWindowError(
                f"Session window {window_start} - {window_end} is shorter than one minute"
            )

        timelines = group_by_counter(self.timeline_provider.fetch(window_start, window_end))

        response = []
        for counter_name, samples in timelines.items():
            blocks = build_congestion_blocks(samples, skip_idle=False)
            index = weighted_congestion_index(blocks, session_minutes)

            response.append(SessionCongestion(
                counter_name=counter_name,
                weighted_congestion_index=index,
                session_minutes=session_minutes,
                blocks=blocks,
            ))

        logger.info(f"Computed session congestion for {len(response)} counters over {session_minutes} min")
        return response


def _check_window(window_start: datetime, window_end: datetime):
    if (window_start.tzinfo is None) != (window_end.tzinfo is None):
        raise InvalidWindowError(
            f"Window bounds mix naive and offset-aware times ({window_start} - {window_end})"
        )
    if window_end < window_start:
        raise InvalidWindowError(f"Window ends ({window_end}) before it starts ({window_start})")
