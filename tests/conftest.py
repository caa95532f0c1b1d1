"""Root conftest for all tests.

Points the lazily-created engine at a per-test SQLite file so that every
session opened through app.db.session (including from worker threads)
shares one real database with real transactions.
"""

import pytest
from sqlalchemy import select

import app.db.session as session_module
from app.catalog.repository import upsert_activity
from app.catalog.seed_data import DEMO_ACTIVITIES
from app.db.models import Activity, Base
from app.db.session import build_engine, get_session


@pytest.fixture
def db_engine(tmp_path, monkeypatch):
    """Provides a fresh file-backed SQLite database with the full schema."""
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(engine)

    monkeypatch.setattr(session_module, "_get_engine", lambda: engine)
    monkeypatch.setattr(session_module, "_SessionLocal", None)

    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def seeded_catalog(db_engine) -> dict[str, int]:
    """Load the demo catalog and return activity ids by name."""
    with get_session() as session:
        for data in DEMO_ACTIVITIES:
            upsert_activity(session, data)

    with get_session() as session:
        return {activity.name: activity.id for activity in session.execute(select(Activity)).scalars()}


@pytest.fixture
def test_user_id() -> str:
    return "user-1"


@pytest.fixture
def other_user_id() -> str:
    return "user-2"
