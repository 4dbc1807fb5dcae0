# Pytest configuration for the data-access layer tests.
# Forces a local SQLite DB and seeds a small listing dataset for accessor tests.
import os
from datetime import date, timedelta
from typing import Any, Iterator, List, Sequence

import pytest
from sqlalchemy.orm import Session

# Test-time environment: local SQLite DB
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import sys
# Ensure the repo root is on sys.path so 'lightbnb' resolves when running pytest without an install
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from lightbnb.db import Base, engine, get_executor  # noqa: E402
from lightbnb import models  # noqa: E402,F401
from lightbnb.errors import DataAccessError  # noqa: E402
from lightbnb.executor import SqlExecutor  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def _bootstrap_db() -> Iterator[None]:
    """
    Session-level database bootstrap using a local SQLite file.

    Drops and recreates schema once per test session to ensure a clean slate.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_db() -> Iterator[None]:
    """
    Function-level isolation: drop and recreate schema before each test.
    """
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture()
def executor() -> Iterator[SqlExecutor]:
    """SQL executor bound to the test engine, obtained the same way an application would."""
    yield from get_executor()


@pytest.fixture()
def listings() -> dict:
    """
    Seed users, properties, reservations and reviews.

    Average ratings: loft 4.5, harbour 3.0, lake 4.5, budget 2.0; 'unreviewed'
    has no reviews and so never appears in listings.
    Guest 2 has four past stays and one upcoming stay.
    """
    upcoming = date.today() + timedelta(days=10)
    with Session(engine) as db:
        db.add_all([
            models.User(id=1, name="Olivia Owner", email="owner@example.com", password="pw"),
            models.User(id=2, name="Gary Guest", email="guest@example.com", password="pw"),
            models.User(id=3, name="Hanna Host", email="host@example.com", password="pw"),
        ])
        db.flush()
        db.add_all([
            models.Property(id=1, owner_id=1, title="Cozy Loft", city="Vancouver", cost_per_night=8000),
            models.Property(id=2, owner_id=1, title="Harbour View", city="North Vancouver", cost_per_night=12000),
            models.Property(id=3, owner_id=3, title="Lake House", city="Calgary", cost_per_night=15000),
            models.Property(id=4, owner_id=1, title="Budget Room", city="Toronto", cost_per_night=3000),
            models.Property(id=5, owner_id=3, title="Unreviewed", city="Vancouver", cost_per_night=5000),
        ])
        db.flush()
        db.add_all([
            models.Reservation(id=1, property_id=1, guest_id=2, start_date=date(2020, 1, 10), end_date=date(2020, 1, 15)),
            models.Reservation(id=2, property_id=2, guest_id=2, start_date=date(2019, 6, 1), end_date=date(2019, 6, 5)),
            models.Reservation(id=3, property_id=3, guest_id=2, start_date=date(2021, 3, 1), end_date=date(2021, 3, 4)),
            models.Reservation(id=4, property_id=4, guest_id=2, start_date=date(2018, 2, 1), end_date=date(2018, 2, 3)),
            models.Reservation(id=5, property_id=1, guest_id=2, start_date=upcoming, end_date=upcoming + timedelta(days=2)),
        ])
        db.flush()
        db.add_all([
            models.PropertyReview(guest_id=2, property_id=1, reservation_id=1, rating=5),
            models.PropertyReview(guest_id=2, property_id=1, reservation_id=1, rating=4),
            models.PropertyReview(guest_id=2, property_id=2, reservation_id=2, rating=3),
            models.PropertyReview(guest_id=2, property_id=3, reservation_id=3, rating=4),
            models.PropertyReview(guest_id=2, property_id=3, reservation_id=3, rating=5),
            models.PropertyReview(guest_id=2, property_id=4, reservation_id=4, rating=2),
        ])
        db.commit()
    return {"owner_id": 1, "guest_id": 2, "host_id": 3}


class RecordingExecutor:
    """Test double that records every call and replays canned rows."""

    def __init__(self, rows: Sequence[dict] = ()) -> None:
        self.rows: List[dict] = list(rows)
        self.calls: List[tuple] = []

    def execute(self, sql: str, params: Sequence[Any]) -> List[dict]:
        self.calls.append((sql, list(params)))
        return list(self.rows)


class FailingExecutor:
    """Test double whose every call fails the way a dropped connection would."""

    def execute(self, sql: str, params: Sequence[Any]) -> List[dict]:
        raise DataAccessError("connection refused", sql=sql)


@pytest.fixture()
def recording_executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def failing_executor() -> FailingExecutor:
    return FailingExecutor()
