from .database import engine, SessionLocal, Base, init_db
from .models import CounterSampleDB

__all__ = [
    "engine", "SessionLocal", "Base", "init_db",
    "CounterSampleDB",
]
