from .database import (
    engine, SessionLocal, Base, init_db,
    create_db_engine, make_session_factory,
)
from .models import TrafficSampleDB

__all__ = [
    "engine", "SessionLocal", "Base", "init_db",
    "create_db_engine", "make_session_factory",
    "TrafficSampleDB",
]
