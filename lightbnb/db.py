from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base
from typing import Iterator
import os

from .executor import SqlExecutor

# DATABASE_URL defaults to a local SQLite file at ./data.db (relative to the working directory).
# Override via the DATABASE_URL environment variable for staging/production (e.g. postgresql+psycopg://...).
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data.db")

# Build the SQLAlchemy engine with backend-specific settings.
# - SQLite (dev/local): allow same-thread access since it's a file-based database.
# - Server DBs (e.g., Postgres): validate pooled connections before use and recycle them periodically.
if DATABASE_URL.startswith("sqlite"):
    engine = create_engine(DATABASE_URL, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        DATABASE_URL,
        pool_pre_ping=True,
        pool_recycle=280,
    )

# Base class for ORM models declared via SQLAlchemy's declarative API
Base = declarative_base()


def get_executor() -> Iterator[SqlExecutor]:
    """
    Yield a query executor bound to the process engine.

    Usable as a framework dependency; the executor owns no connection between
    calls, so there is nothing to release afterwards.
    """
    yield SqlExecutor(engine)
