"""
Endpoints for submitting and inspecting raw counter samples.
"""
from datetime import datetime
from typing import List, Optional
from fastapi import FastAPI, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from .....common.logging import setup_logger
from .....common.schemas.counter import CounterMessage, CounterRecord
from ....application.ingest import CounterIngestService
from ....infrastructure.repositories import SqlCounterSampleRepository

logger = setup_logger(__name__)

app = FastAPI()

# Singletons
_repository: Optional[SqlCounterSampleRepository] = None
_ingest: Optional[CounterIngestService] = None

def init_samples(repository: SqlCounterSampleRepository, ingest: CounterIngestService):
    global _repository, _ingest
    _repository = repository
    _ingest = ingest

def get_repository() -> SqlCounterSampleRepository:
    if _repository is None:
        raise HTTPException(503, "Sample repository not initialized")
    return _repository

def get_ingest() -> CounterIngestService:
    if _ingest is None:
        raise HTTPException(503, "Ingest service not initialized")
    return _ingest

@app.post("/api/counter-data/submit")
async def submit_message(message: CounterMessage):
    """
    Stores one counter message and pushes it to live subscribers.

    Body example:
    {
        "device_id": "edge-01",
        "counter_name": "Tandoor",
        "Tandoor_occupancy": 4,
        "Tandoor_incount": 37,
        "Tandoor_waiting_time_min": "5 min"
    }
    """
    record = await get_ingest().process(message)
    return {
        "status": "success",
        "message": "Data saved successfully",
        "id": record.id,
        "deviceId": record.device_id,
        "counterName": record.counter_name,
        "timestamp": datetime.now(),
    }

@app.get("/api/counter-data/counter/{counter_name}/latest", response_model=CounterRecord)
def latest_by_counter(counter_name: str):
    record = get_repository().latest_by_counter(counter_name)
    if record is None:
        raise HTTPException(404, f"No data found for counter: {counter_name}")
    return CounterRecord.model_validate(record)

@app.get("/api/counter-data/device/{device_id}/latest", response_model=CounterRecord)
def latest_by_device(device_id: str):
    record = get_repository().latest_by_device(device_id)
    if record is None:
        raise HTTPException(404, f"No data found for device: {device_id}")
    return CounterRecord.model_validate(record)

@app.get("/api/counter-data/device/{device_id}")
def device_history(device_id: str):
    """Every record from one device, newest first."""
    records = [CounterRecord.model_validate(r) for r in get_repository().by_device(device_id)]
    return {
        "status": "success",
        "deviceId": device_id,
        "count": len(records),
        "data": [r.model_dump(mode="json", by_alias=True) for r in records],
    }

@app.get("/api/counter-data/recent", response_model=List[CounterRecord])
def recent(limit: int = Query(10, ge=1, le=1000)):
    return [CounterRecord.model_validate(r) for r in get_repository().recent(limit)]

@app.get("/api/counter-data/stats")
def statistics():
    """Record count, known counters/devices and the newest record."""
    repository = get_repository()
    total = repository.count()
    stats = {
        "status": "success",
        "totalRecords": total,
        "timestamp": datetime.now(),
    }
    if total > 0:
        latest = repository.recent(1)
        if latest:
            stats["lastRecord"] = CounterRecord.model_validate(latest[0]).model_dump(mode="json", by_alias=True)
        counter_names = repository.counter_names()
        device_ids = repository.device_ids()
        stats.update({
            "uniqueCounters": len(counter_names),
            "uniqueDevices": len(device_ids),
            "counterNames": counter_names,
            "deviceIds": device_ids,
        })
    return stats

@app.get("/api/counter-data/health")
def health():
    status = {
        "status": "UP",
        "service": "Counter Congestion Analytics",
        "timestamp": datetime.now(),
    }
    try:
        status["recordCount"] = get_repository().count()
        status["databaseConnected"] = True
    except SQLAlchemyError as e:
        logger.warning(f"Health check could not reach the database: {e}")
        status["databaseConnected"] = False
        status["error"] = str(e)
    return status
