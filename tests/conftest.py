import os

# Keep the module-level engine off the network during tests
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from datetime import datetime, timedelta
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from src.congestion.domain.entities import Sample


def make_samples(counter_name, waits, start=datetime(2024, 5, 2, 9, 0), step=timedelta(minutes=1)):
    """Builds evenly spaced samples for one counter."""
    return [
        Sample(counter_name=counter_name, timestamp=start + i * step, wait_time_minutes=w)
        for i, w in enumerate(waits)
    ]


@pytest.fixture
def scenario_samples():
    """Counter C1 at one-minute spacing from 09:00."""
    return make_samples("C1", [1, 4, 4, 6, 0, 13])


@pytest.fixture
def session_factory():
    """In-memory SQLite database shared across threads."""
    from src.common.database import init_db

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()
