import pytest
from datetime import datetime
from pydantic import ValidationError
from src.common.schemas import CounterMessage, CongestionBlockOut, SessionCongestionOut
from src.congestion.domain import CongestionBlock, CongestionLevel, SessionCongestion

def test_counter_message_reads_prefixed_metrics():
    msg = CounterMessage(**{
        "device_id": "edge-01",
        "counter_name": "Tandoor",
        "Tandoor_occupancy": 4,
        "Tandoor_incount": "37",
        "Tandoor_waiting_time_min": "5 min",
    })
    assert msg.occupancy == 4
    assert msg.in_count == 37
    assert msg.wait_time_minutes == 5.0

def test_counter_message_falls_back_to_loose_keys():
    msg = CounterMessage(**{
        "device_id": "edge-01",
        "counter_name": "Pan Pacific",
        "pan_pacific_oc_cupancy": 9,
        "pan_pacific_occupancy": 6,
        "pan_pacific_in_count": 12.0,
        "pan_pacific_wait_time": 7.5,
    })
    assert msg.occupancy == 6
    assert msg.in_count == 12
    assert msg.wait_time_minutes == 7.5

@pytest.mark.parametrize("text, minutes", [
    ("ready to serve", 0.0),
    ("Ready", 0.0),
    ("", 0.0),
    ("about 12 min", 12.0),
    ("3.5", 3.5),
    ("n/a", 0.0),
])
def test_counter_message_wait_time_text(text, minutes):
    msg = CounterMessage(device_id="d", counter_name="C", C_waiting_time_min=text)
    assert msg.wait_time_minutes == minutes

def test_counter_message_defaults_missing_metrics():
    msg = CounterMessage(device_id="d", counter_name="C")
    assert msg.occupancy == 0
    assert msg.in_count == 0
    assert msg.wait_time_minutes == 0.0

@pytest.mark.parametrize("value", [float("nan"), float("inf"), "1e999 min"])
def test_counter_message_rejects_non_finite_wait(value):
    with pytest.raises(ValidationError):
        CounterMessage(device_id="d", counter_name="C", C_waiting_time_min=value)

def test_counter_message_requires_names():
    with pytest.raises(ValidationError):
        CounterMessage(device_id="d")
    with pytest.raises(ValidationError):
        CounterMessage(device_id="d", counter_name="   ")

def test_block_schema_uses_camel_case_and_level_strings():
    block = CongestionBlock(
        level=CongestionLevel.SEVERE, weight=3,
        start=datetime(2024, 5, 2, 9, 0), end=datetime(2024, 5, 2, 9, 10),
        duration_minutes=10,
    )
    dumped = CongestionBlockOut.from_domain(block).model_dump(mode="json", by_alias=True)
    assert dumped == {
        "level": "Severe",
        "weight": 3,
        "start": "2024-05-02T09:00:00",
        "end": "2024-05-02T09:10:00",
        "durationMinutes": 10,
    }

def test_session_schema_rejects_unknown_level():
    with pytest.raises(ValidationError):
        CongestionBlockOut(
            level="Moderate", weight=1,
            start=datetime(2024, 5, 2, 9, 0), end=datetime(2024, 5, 2, 9, 0),
            duration_minutes=0,
        )

def test_session_schema_from_domain():
    session = SessionCongestion(counter_name="C1", weighted_congestion_index=4.0, session_minutes=5, blocks=[])
    dumped = SessionCongestionOut.from_domain(session).model_dump(by_alias=True)
    assert dumped == {
        "counterName": "C1",
        "weightedCongestionIndex": 4.0,
        "sessionMinutes": 5,
        "blocks": [],
    }
