import math
import re
from datetime import datetime
from typing import Any, Iterable, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_NUMBER = re.compile(r"^[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?$")


class CounterMessage(BaseModel):
    """
    Raw telemetry message published by a counter device.

    Metric keys are dynamic and prefixed with the counter name, e.g.
    ``{"counter_name": "Tandoor", "Tandoor_occupancy": 4,
    "Tandoor_incount": 37, "Tandoor_waiting_time_min": "5 min"}``.
    """
    model_config = ConfigDict(extra="allow")

    device_id: str = Field(..., description="Identifier of the publishing device")
    counter_name: str = Field(..., description="Name of the service counter")

    @field_validator('device_id', 'counter_name')
    def must_not_be_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('must not be blank')
        return v

    @model_validator(mode='after')
    def wait_time_must_be_finite(self):
        # Metric keys are extra fields, so they are checked once the model is built
        raw = self._metric("_waiting_time_min", ("waiting_time", "wait_time"))
        if isinstance(raw, float) and not math.isfinite(raw):
            raise ValueError(f"wait time must be finite, got {raw}")
        if not math.isfinite(self.wait_time_minutes):
            raise ValueError(f"wait time must be finite, got {self.wait_time_text}")
        return self

    def _metric(self, exact_suffix: str, fragments: Iterable[str]) -> Optional[Any]:
        extras = self.model_extra or {}
        exact_key = f"{self.counter_name}{exact_suffix}"
        if exact_key in extras:
            return extras[exact_key]
        for key, value in extras.items():
            lowered = key.lower()
            if any(fragment in lowered for fragment in fragments):
                return value
        return None

    @property
    def occupancy(self) -> int:
        return _to_int(self._metric("_occupancy", ("occupancy",)))

    @property
    def in_count(self) -> int:
        return _to_int(self._metric("_incount", ("incount", "in_count")))

    @property
    def wait_time_text(self) -> str:
        value = self._metric("_waiting_time_min", ("waiting_time", "wait_time"))
        return "0" if value is None else str(value)

    @property
    def wait_time_minutes(self) -> float:
        """
        Wait time in minutes: "ready to serve" -> 0.0, "5 min" -> 5.0.
        The first numeric token wins; unparseable text reads as 0.0.
        """
        cleaned = self.wait_time_text.strip().lower()
        if not cleaned or "ready" in cleaned:
            return 0.0
        for part in cleaned.split():
            if _NUMBER.match(part):
                return float(part)
        return 0.0


def _to_int(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


class CounterRecord(BaseModel):
    """
    A persisted counter sample as exposed by the API.
    """
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    device_id: str = Field(..., alias="deviceId")
    counter_name: str = Field(..., alias="counterName")
    occupancy: int = 0
    in_count: int = Field(0, alias="inCount")
    wait_time: Optional[float] = Field(None, alias="waitTime", description="Wait time in minutes")
    timestamp: datetime
