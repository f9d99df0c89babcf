import datetime
import os
import random
import sys

import numpy as np
import pandas as pd
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add project root to path to import schemas
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from src.common.database import init_db
from src.common.schemas.counter import CounterMessage
from src.congestion.infrastructure.repositories import SqlCounterSampleRepository

# Simulation Configuration
COUNTERS = {
    # Counter name : Device ID
    "Tandoor": "edge-01",
    "Pan Pacific": "edge-02",
    "Salad Bar": "edge-03",
}
# Meal rushes (hour, minute) where queues build up
RUSH_PERIODS = [((8, 0), (9, 15)), ((12, 30), (13, 45)), ((17, 30), (18, 30))]

def _in_rush(moment: datetime.datetime) -> bool:
    minutes = moment.hour * 60 + moment.minute
    return any(h0 * 60 + m0 <= minutes < h1 * 60 + m1 for (h0, m0), (h1, m1) in RUSH_PERIODS)

def generate_day(day: datetime.date, interval_minutes: int = 1) -> pd.DataFrame:
    print(f"Generating synthetic counter samples for {day}...")
    rows = []
    start = datetime.datetime.combine(day, datetime.time(6, 55))
    end = datetime.datetime.combine(day, datetime.time(19, 0))

    for counter_name, device_id in COUNTERS.items():
        in_count = 0
        moment = start
        while moment <= end:
            rush = _in_rush(moment)
            occupancy = int(np.clip(np.random.normal(12 if rush else 3, 3), 0, None))
            in_count += random.randint(1, 6) if rush else random.randint(0, 2)
            # Devices report whole minutes or "ready to serve"
            wait = int(np.clip(np.random.normal(9 if rush else 1.5, 3), 0, None))
            wait_text = "ready to serve" if wait == 0 else f"{wait} min"

            message = CounterMessage(**{
                "device_id": device_id,
                "counter_name": counter_name,
                f"{counter_name}_occupancy": occupancy,
                f"{counter_name}_incount": in_count,
                f"{counter_name}_waiting_time_min": wait_text,
            })
            rows.append({
                "timestamp": moment,
                "device_id": message.device_id,
                "counter_name": message.counter_name,
                "occupancy": message.occupancy,
                "in_count": message.in_count,
                "wait_time": message.wait_time_minutes,
            })
            moment += datetime.timedelta(minutes=interval_minutes)

    return pd.DataFrame(rows)

def persist(df: pd.DataFrame, database_url: str):
    engine = create_engine(database_url)
    init_db(bind=engine)
    repository = SqlCounterSampleRepository(sessionmaker(bind=engine))
    for row in df.itertuples(index=False):
        repository.save(
            device_id=row.device_id,
            counter_name=row.counter_name,
            occupancy=int(row.occupancy),
            in_count=int(row.in_count),
            wait_time=float(row.wait_time),
            timestamp=row.timestamp.to_pydatetime(),
        )

if __name__ == "__main__":
    day = datetime.date.fromisoformat(sys.argv[1]) if len(sys.argv) > 1 else datetime.date.today()
    df = generate_day(day)

    output_file = f"data/counters/counter_samples_{day}.csv"
    os.makedirs(os.path.dirname(output_file), exist_ok=True)
    df.to_csv(output_file, index=False)
    print(f"Saved {len(df)} records to {output_file}")

    database_url = os.getenv("DATABASE_URL")
    if database_url:
        persist(df, database_url)
        print(f"Inserted {len(df)} records into {database_url}")
