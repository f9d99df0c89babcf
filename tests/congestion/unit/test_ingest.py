import threading
import pytest
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from src.common.schemas.counter import CounterMessage
from src.congestion.application.ingest import CounterIngestService

def stored_row(**overrides):
    row = dict(
        id=7, device_id="edge-01", counter_name="Tandoor", occupancy=4,
        in_count=37, wait_time=5.0, timestamp=datetime(2024, 5, 2, 9, 0),
    )
    row.update(overrides)
    return SimpleNamespace(**row)

@pytest.fixture
def message():
    return CounterMessage(**{
        "device_id": "edge-01",
        "counter_name": "Tandoor",
        "Tandoor_occupancy": 4,
        "Tandoor_incount": 37,
        "Tandoor_waiting_time_min": "5 min",
    })

@pytest.mark.asyncio
async def test_process_saves_then_publishes(message):
    repository = MagicMock()
    repository.save.return_value = stored_row()
    broadcaster = MagicMock()
    broadcaster.publish_sample = AsyncMock()

    record = await CounterIngestService(repository, broadcaster).process(message)

    repository.save.assert_called_once_with(
        device_id="edge-01", counter_name="Tandoor", occupancy=4, in_count=37, wait_time=5.0,
    )
    assert record.id == 7
    broadcaster.publish_sample.assert_awaited_once_with({
        "id": 7,
        "deviceId": "edge-01",
        "counterName": "Tandoor",
        "occupancy": 4,
        "inCount": 37,
        "waitTime": 5.0,
        "timestamp": "2024-05-02T09:00:00",
    })

@pytest.mark.asyncio
async def test_process_saves_outside_event_loop_thread(message):
    loop_thread = threading.get_ident()
    save_threads = []

    def save(**kwargs):
        save_threads.append(threading.get_ident())
        return stored_row()

    repository = MagicMock()
    repository.save.side_effect = save
    broadcaster = MagicMock()
    broadcaster.publish_sample = AsyncMock()

    await CounterIngestService(repository, broadcaster).process(message)

    assert save_threads and save_threads[0] != loop_thread
