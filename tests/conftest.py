"""Pytest configuration and fixtures."""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

import mindbloom.services.token_denylist as token_denylist
from mindbloom.api.dependencies import get_companion_service, get_mood_analysis_service
from mindbloom.database import Base, build_engine, get_db
from mindbloom.main import app


class AuthHeaders(dict):
    """Dict subclass that also stores the registered user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeRedis:
    """Just enough of redis.Redis for the token denylist."""

    def __init__(self):
        self.store = {}

    def setex(self, key, ttl, value):
        self.store[key] = (value, ttl)

    def exists(self, key):
        return int(key in self.store)


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/mindbloom", "/mindbloom_test")
else:
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = build_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from mindbloom import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(autouse=True)
def fake_redis():
    """Point the token denylist at an in-process fake."""
    fake = FakeRedis()
    token_denylist._sync_redis = fake
    yield fake
    token_denylist._sync_redis = None


@pytest.fixture
def mood_service():
    """Mood classifier that always answers 'happy'."""
    service = MagicMock()
    service.analyze = AsyncMock(
        return_value={"mood": "happy", "confidence": 0.9, "insights": [], "source": "llm"}
    )
    return service


@pytest.fixture
def companion_service():
    """Companion that answers without calling the model."""
    service = MagicMock()
    service.chat = AsyncMock(
        return_value={
            "message": "Take a slow breath with me.",
            "tone": "supportive",
            "suggestions": ["Try box breathing"],
            "is_fallback": False,
        }
    )
    service.quote = AsyncMock(
        return_value={"quote": "Keep going.", "author": "Unknown", "theme": "Persistence"}
    )
    return service


@pytest.fixture(scope="function")
def client(db, mood_service, companion_service):
    """Create a test client with database and AI overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mood_analysis_service] = lambda: mood_service
    app.dependency_overrides[get_companion_service] = lambda: companion_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return auth headers for them."""

    def _register(email: str, password: str = "secret123", name: str | None = None):
        response = client.post(
            "/api/v1/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, response.text
        data = response.json()
        return AuthHeaders(
            {"Authorization": f"Bearer {data['access_token']}"},
            user_id=data["user"]["id"],
            email=email,
        )

    return _register


@pytest.fixture
def auth_headers(register):
    """Alice's auth headers."""
    return register("alice@example.com", name="Alice")


@pytest.fixture
def bob_headers(register):
    """Bob's auth headers."""
    return register("bob@example.com", name="Bob")
