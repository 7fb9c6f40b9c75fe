"""Shared fixtures: temp data dir, in-memory database, API client."""

import os
import tempfile
import uuid
from datetime import datetime, timezone

# Setup environment for testing (before any handytrack import)
os.environ["HANDYTRACK_DATA_DIR"] = tempfile.mkdtemp()
os.environ["HANDYTRACK_DB_PATH"] = os.path.join(os.environ["HANDYTRACK_DATA_DIR"], "test.db")
os.environ["HANDYTRACK_JWT_SECRET"] = "test-secret-for-handytrack-suite-0123456789"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session

from handytrack.database import create_db_engine, init_db
from handytrack.models.user import User
from handytrack.repositories.device_repository import DeviceRepository
from handytrack.services.device_service import DeviceService


@pytest.fixture
def engine():
    test_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


def _add_user(session: Session, user_id: str, username: str) -> User:
    user = User(id=user_id, username=username, password_hash="", name=username.title())
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def alice(session):
    return _add_user(session, "usr_alice", "alice")


@pytest.fixture
def bob(session):
    return _add_user(session, "usr_bob", "bob")


@pytest.fixture
def repo(session):
    return DeviceRepository(session)


@pytest.fixture
def service(repo):
    return DeviceService(repo)


@pytest.fixture
def make_device(repo):
    """Insert a device straight through the repository."""

    def _make(user_id: str, device_id: str, **overrides):
        fields = {
            "id": device_id,
            "model": "iPhone 13",
            "storage": "128GB",
            "color": "Blue",
            "condition": "Good",
            "status": "STOCK",
            "purchase_date": datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc),
            "purchase_price": 350.0,
        }
        fields.update(overrides)
        return repo.create(user_id, fields)

    return _make


# --- API ---

@pytest.fixture(scope="session")
def client():
    from handytrack.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    """Register a fresh user through the API, return auth headers."""

    def _register(username: str | None = None) -> dict:
        username = username or f"user_{uuid.uuid4().hex[:8]}"
        r = client.post("/api/v1/auth/register", json={
            "username": username,
            "email": f"{username}@example.com",
            "name": "Test User",
            "password": "secret123",
            "confirm_password": "secret123",
        })
        assert r.status_code == 201, r.text
        return {"Authorization": f"Bearer {r.json()['access_token']}"}

    return _register


@pytest.fixture
def headers(register):
    return register()
