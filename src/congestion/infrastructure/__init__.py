from .repositories import SqlCounterSampleRepository, SqlTimelineProvider, SqlShiftSummaryProvider
from .broadcast.realtime_broadcaster import RealtimeBroadcaster, ALL_COUNTERS
