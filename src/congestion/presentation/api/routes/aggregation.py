"""
Endpoints for congestion analytics.
"""
from datetime import date, datetime, time
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Query
from .....common.exceptions import CongestionAnalyticsError
from .....common.schemas.congestion import AggregationResultOut, SessionCongestionOut
from ....application.service import CongestionAggregationService

app = FastAPI()

# Singleton
_service: Optional[CongestionAggregationService] = None

def init_service(service: CongestionAggregationService):
    global _service
    _service = service

def get_service() -> CongestionAggregationService:
    if _service is None:
        raise HTTPException(503, "Aggregation service not initialized")
    return _service

@app.get("/api/counter-data/aggregate/hourly", response_model=List[AggregationResultOut])
def aggregate_hourly(day: date = Query(..., alias="date")):
    """
    Per-counter shift summary and peak congestion for one calendar day.
    """
    service = get_service()
    window_start = datetime.combine(day, time.min)
    window_end = datetime.combine(day, time(23, 59, 59))
    try:
        results = service.aggregate_for_window(window_start, window_end)
    except CongestionAnalyticsError as e:
        raise HTTPException(400, str(e))
    return [AggregationResultOut.from_domain(r) for r in results]

@app.get("/api/counter-data/congestion/session", response_model=List[SessionCongestionOut])
def session_congestion(
    window_start: datetime = Query(..., alias="from"),
    window_end: datetime = Query(..., alias="to"),
):
    """
    Weighted congestion index per counter for an arbitrary window.

    Example: `/api/counter-data/congestion/session?from=2024-05-02T11:25:00&to=2024-05-02T15:25:00`
    """
    service = get_service()
    try:
        sessions = service.compute_session_congestion(window_start, window_end)
    except CongestionAnalyticsError as e:
        raise HTTPException(400, str(e))
    return [SessionCongestionOut.from_domain(s) for s in sessions]
