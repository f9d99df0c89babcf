from datetime import datetime
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

LevelName = Literal['Low', 'High', 'Critical', 'Severe', 'Extreme']


class CongestionBlockOut(BaseModel):
    """
    A contiguous run of samples sharing one congestion weight.
    """
    model_config = ConfigDict(populate_by_name=True)

    level: LevelName = Field(..., description="Severity label of the block")
    weight: int = Field(..., ge=0, description="Severity weight (0, 1, 2, 3 or 5)")
    start: datetime = Field(..., description="Timestamp of the first sample in the block")
    end: datetime = Field(..., description="Timestamp of the last sample in the block")
    duration_minutes: int = Field(..., ge=0, alias="durationMinutes")

    @classmethod
    def from_domain(cls, block) -> "CongestionBlockOut":
        return cls(
            level=block.level.value,
            weight=block.weight,
            start=block.start,
            end=block.end,
            duration_minutes=block.duration_minutes,
        )


class PeakCongestionOut(CongestionBlockOut):
    """
    The dominant congestion block of a window.
    """
    peak_wait_time_in_block: float = Field(
        ..., alias="peakWaitTimeInBlock",
        description="Highest wait time (minutes) observed inside the block"
    )

    @classmethod
    def from_domain(cls, peak) -> "PeakCongestionOut":
        return cls(
            level=peak.level.value,
            weight=peak.weight,
            start=peak.start,
            end=peak.end,
            duration_minutes=peak.duration_minutes,
            peak_wait_time_in_block=peak.peak_wait_time_in_block,
        )


class AggregationResultOut(BaseModel):
    """
    Per-counter shift summary for a day window, with its peak congestion.
    """
    model_config = ConfigDict(populate_by_name=True)

    counter_name: str = Field(..., alias="counterName")
    total_count: int = Field(..., alias="totalCount", description="Footfall summed over service windows")
    peak_queue: int = Field(..., alias="peakQueue", description="Highest occupancy seen")
    peak_wait_time: float = Field(..., alias="peakWaitTime", description="Highest wait time in minutes")
    period_start: datetime = Field(..., alias="periodStart", description="First sample in the service windows")
    peak_congestion: Optional[PeakCongestionOut] = Field(None, alias="peakCongestion")

    @classmethod
    def from_domain(cls, result) -> "AggregationResultOut":
        return cls(
            counter_name=result.counter_name,
            total_count=result.total_count,
            peak_queue=result.peak_queue,
            peak_wait_time=result.peak_wait_time,
            period_start=result.period_start,
            peak_congestion=(
                PeakCongestionOut.from_domain(result.peak_congestion)
                if result.peak_congestion is not None else None
            ),
        )


class SessionCongestionOut(BaseModel):
    """
    Time-weighted congestion breakdown of one counter over a session.
    """
    model_config = ConfigDict(populate_by_name=True)

    counter_name: str = Field(..., alias="counterName")
    weighted_congestion_index: float = Field(
        ..., alias="weightedCongestionIndex",
        description="Percentage of the theoretical maximum severity"
    )
    session_minutes: int = Field(..., alias="sessionMinutes")
    blocks: List[CongestionBlockOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, session) -> "SessionCongestionOut":
        return cls(
            counter_name=session.counter_name,
            weighted_congestion_index=session.weighted_congestion_index,
            session_minutes=session.session_minutes,
            blocks=[CongestionBlockOut.from_domain(b) for b in session.blocks],
        )
