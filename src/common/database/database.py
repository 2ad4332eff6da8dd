import os
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Default to a local SQLite file if not specified
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./traffic.db")

Base = declarative_base()


def create_db_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


def make_session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


engine = create_db_engine(DATABASE_URL)
SessionLocal = make_session_factory(engine)


def init_db(bind=None):
    """Initialize database tables."""
    # Import models here to ensure they are registered with Base
    from . import models
    Base.metadata.create_all(bind=bind or engine)
