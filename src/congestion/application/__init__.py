from .blocks import build_congestion_blocks, whole_minutes
from .peak import select_peak_congestion
from .session_index import weighted_congestion_index
from .service import CongestionAggregationService, group_by_counter
from .ingest import CounterIngestService
