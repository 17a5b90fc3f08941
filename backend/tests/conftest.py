"""
Pytest configuration and shared fixtures.

Every test gets its own application instance backed by a private
in-memory SQLite database.
"""

import os

# The module-level app in contactbook.main is built at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient

from contactbook.core.config import Settings
from contactbook.main import create_app

ADMIN_PASSWORD = "admin-secret"
ADMIN_HEADERS = {"admin-password": ADMIN_PASSWORD}


def make_settings(**overrides) -> Settings:
    values = dict(
        ENVIRONMENT="test",
        DATABASE_URL="sqlite://",
        JWT_SECRET_KEY="test-secret",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        BCRYPT_ROUNDS=4,
        API_RATE_LIMIT=10000,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db_session(client, app):
    """A session on the same database the client talks to"""
    session = app.state.db.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def issue_key(client):
    def _issue() -> str:
        resp = client.post("/api/admin/license-keys", json={"quantity": 1}, headers=ADMIN_HEADERS)
        assert resp.status_code == 200
        return resp.json()["keys"][0]
    return _issue


@pytest.fixture
def make_user(client, issue_key):
    """Register and log in a user; returns the Authorization headers"""
    def _make(email: str, password: str = "pw") -> dict:
        resp = client.post(
            "/api/register",
            json={"email": email, "password": password, "licenseKey": issue_key()},
        )
        assert resp.status_code == 201
        resp = client.post("/api/login", json={"email": email, "password": password})
        assert resp.status_code == 200
        return {"Authorization": f"Bearer {resp.json()['token']}"}
    return _make


@pytest.fixture
def auth_headers(make_user):
    return make_user("owner@example.com")
