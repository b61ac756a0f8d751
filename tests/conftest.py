"""
Shared fixtures — an app wired to an in-memory SQLite store.
"""

import pytest
from fastapi.testclient import TestClient

from config.settings import Settings
from main import create_app

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite+aiosqlite:///:memory:",
        "jwt_secret": TEST_SECRET,
        "bcrypt_rounds": 4,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def register_and_login(client, username="alice", password="pw1") -> str:
    assert client.post("/register", json={"username": username, "password": password}).status_code == 201
    resp = client.post("/login", json={"username": username, "password": password})
    assert resp.status_code == 200
    return resp.json()["token"]


@pytest.fixture
def auth_headers(client):
    return {"Authorization": f"Bearer {register_and_login(client)}"}
