from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, DateTime, BigInteger, Index

from .database import Base

# --- Counter telemetry ---

class CounterSampleDB(Base):
    __tablename__ = "counter_samples"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    device_id = Column(String, nullable=False, index=True)
    counter_name = Column(String, nullable=False, index=True)
    occupancy = Column(Integer, nullable=False, default=0)
    in_count = Column(Integer, nullable=False, default=0)
    wait_time = Column(Float, nullable=True)  # minutes
    timestamp = Column(DateTime, nullable=False, index=True, default=datetime.now)
    created_at = Column(DateTime, nullable=False, default=datetime.now)

    __table_args__ = (
        Index("ix_counter_samples_counter_timestamp", "counter_name", "timestamp"),
    )
