"""
Pytest configuration and shared fixtures.

The app runs against an in-memory SQLite database with the scheduler off and
the simulated execution delays scaled to zero.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SCHEDULER_ENABLED"] = "false"
os.environ["EXECUTION_DELAY_SCALE"] = "0"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import datetime
from typing import Callable, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from extraction_hub.core.database import Base, SessionLocal, engine
from extraction_hub.main import app
from extraction_hub.models import User, UserRole

PASSWORD = "s3cret-pass"


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_user(client) -> Callable[..., Dict[str, str]]:
    """Registers a user, optionally grants an extra role, returns auth headers."""

    def _make(email: str, role: Optional[str] = None) -> Dict[str, str]:
        res = client.post("/auth/register", json={"email": email, "password": PASSWORD})
        assert res.status_code == 201, res.text

        if role:
            session = SessionLocal()
            try:
                user = session.query(User).filter(User.email == email).first()
                session.add(UserRole(user_id=user.id, role=role, assigned_at=datetime.utcnow()))
                session.commit()
            finally:
                session.close()

        res = client.post("/auth/login", json={"email": email, "password": PASSWORD})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _make


@pytest.fixture
def user_headers(make_user) -> Dict[str, str]:
    return make_user("alice@hub.io")


@pytest.fixture
def manager_headers(make_user) -> Dict[str, str]:
    return make_user("morgan@hub.io", role="manager")


@pytest.fixture
def admin_headers(make_user) -> Dict[str, str]:
    return make_user("root@hub.io", role="admin")


@pytest.fixture
def credential_payload() -> dict:
    return {
        "name": "Warehouse",
        "type": "postgresql",
        "host": "db.internal",
        "port": 5432,
        "database_name": "analytics",
        "username": "etl",
        "password": "hunter2",
        "ssl_enabled": True,
    }


@pytest.fixture
def create_credential(client, credential_payload):
    def _create(headers, **overrides) -> dict:
        res = client.post("/api/credentials/", json={**credential_payload, **overrides}, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _create


@pytest.fixture
def create_job(client):
    def _create(headers, **fields) -> dict:
        payload = {
            "name": "Customer Data Sync",
            "source_type": "python",
            "code": "print('extract')",
            "schedule_type": "now",
        }
        payload.update(fields)
        res = client.post("/api/jobs/", json=payload, headers=headers)
        assert res.status_code == 201, res.text
        return res.json()

    return _create
