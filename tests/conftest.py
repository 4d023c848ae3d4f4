"""
Pytest fixtures for Wellness Tracker tests.
"""
import os
import sys
import tempfile
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the project root is importable and the app never touches a real database.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
os.environ.setdefault("WELLNESS_DATA_PATH", tempfile.mkdtemp(prefix="wellness-test-"))

from server.wellness_api.database import DatabaseManager  # noqa: E402
from server.wellness_api.services.metric_store import MetricStore  # noqa: E402


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest.fixture
def db(tmp_path) -> DatabaseManager:
    """Fresh database with the schema applied, unique per test."""
    manager = DatabaseManager(db_path=str(tmp_path / "wellness.db"))
    manager.init_schema()
    return manager


@pytest.fixture
def store(db) -> MetricStore:
    return MetricStore(db)


@pytest.fixture
def make_user(db):
    """
    Factory fixture inserting a bare user row.

    Skips password hashing; use the auth API when the credential matters.
    """

    def _make_user(email: str | None = None) -> str:
        user_id = str(uuid.uuid4())
        now = datetime.now(timezone.utc).isoformat()
        with db.connect() as conn:
            conn.execute(
                "INSERT INTO users (id, email, password_hash, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                (user_id, email or f"{user_id}@example.com", "not-a-hash", now, now),
            )
        return user_id

    return _make_user


@pytest.fixture
def owner(make_user) -> str:
    return make_user("owner@example.com")


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
def client(db):
    """TestClient wired to the per-test database."""
    from fastapi.testclient import TestClient
    from server.wellness_api.main import app
    from server.wellness_api.routes.deps import get_db

    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Factory fixture registering an account and returning its auth headers."""

    def _register(email: str = "alex@example.com", password: str = "secret123") -> dict:
        response = client.post("/api/auth/register", json={"email": email, "password": password})
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register) -> dict:
    return register()
