import asyncio
import sqlite3

import pytest
from fastapi.testclient import TestClient

from leadprovider_api.app.core.config import settings
from leadprovider_api.app.core.db import init_db
from leadprovider_api.app.main import app
from leadprovider_api.app.services.auth_service import AuthService


@pytest.fixture(autouse=True)
def db_path(tmp_path, monkeypatch):
    """Point the application at a fresh SQLite file for every test."""
    path = tmp_path / "leadprovider-test.db"
    monkeypatch.setattr(settings, "database_url", str(path))
    monkeypatch.setattr(settings, "order_status_policy", "lenient")
    init_db()
    return path


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def count_rows(db_path):
    def _count(table: str) -> int:
        conn = sqlite3.connect(db_path)
        try:
            return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        finally:
            conn.close()

    return _count


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client: TestClient, email: str, password: str = "pw123") -> str:
    response = client.post("/api/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["token"]


def register_admin(client: TestClient, email: str = "admin@x.com", password: str = "adminpw") -> str:
    """Register a user, promote it out-of-band and log in again for a fresh token."""
    register(client, email, password)
    asyncio.run(AuthService.set_role(email, "admin"))
    response = client.post("/api/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]
