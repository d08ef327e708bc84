"""Test configuration and fixtures."""

import os
from datetime import date
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Configure the app before anything imports settings
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_LEVEL"] = "DEBUG"

from fastapi.testclient import TestClient
from app.api.deps import get_storage
from app.database import init_db
from app.main import app
from app.schemas.profile import Profile, PersonalityTrait
from app.storage.manager import StorageManager

def make_profile(
    user_id: str,
    birth_date: date = None,
    interests=(),
    traits=None,
    attachment_style=None,
    latitude=None,
    longitude=None
) -> Profile:
    """Build a profile for tests."""
    return Profile(
        id=user_id,
        birth_date=birth_date,
        latitude=latitude,
        longitude=longitude,
        interests=list(interests),
        personality_traits=[
            PersonalityTrait(name=name, value=value) for name, value in (traits or {}).items()
        ],
        attachment_style=attachment_style
    )

@pytest.fixture
def storage():
    """In-memory storage manager."""
    return StorageManager.in_memory()

@pytest.fixture
def user_a():
    """User A: two years older than B, likes hiking and coffee, openness 80."""
    return make_profile(
        "user-a",
        birth_date=date(1995, 3, 1),
        interests=["hiking", "coffee"],
        traits={"openness": 80}
    )

@pytest.fixture
def user_b():
    """User B: likes hiking and art, openness 70."""
    return make_profile(
        "user-b",
        birth_date=date(1997, 3, 1),
        interests=["hiking", "art"],
        traits={"openness": 70}
    )

@pytest.fixture
def sql_engine():
    """Shared in-memory SQLite engine with the schema created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    init_db(bind=engine)
    try:
        yield engine
    finally:
        engine.dispose()

@pytest.fixture
def sql_session_factory(sql_engine):
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=sql_engine)

@pytest.fixture
def sql_storage(sql_session_factory):
    """SQL storage manager over the test engine."""
    return StorageManager.sql(sql_session_factory)

@pytest.fixture
def client(storage):
    """Create a test client backed by in-memory storage."""
    app.dependency_overrides[get_storage] = lambda: storage
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
