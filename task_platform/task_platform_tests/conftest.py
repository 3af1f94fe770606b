import uuid

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from task_platform.task_platform.task_service import db as db_module
from task_platform.task_platform.task_service.main import app


def mock_motor_client(*args, **kwargs):
    client = AsyncMongoMockClient()
    # Everything lives in memory, nothing to release on shutdown
    client.close = lambda: None
    return client


@pytest.fixture
def client(monkeypatch):
    # Fresh in-memory MongoDB for every test
    monkeypatch.setattr(db_module, "AsyncIOMotorClient", mock_motor_client)
    with TestClient(app) as c:
        yield c


def unique_email(prefix="user"):
    return f"{prefix}_{uuid.uuid4().hex[:8]}@example.com"


def register(client, email=None, password="secret123", role=None):
    payload = {"email": email or unique_email(), "password": password}
    if role:
        payload["role"] = role
    response = client.post("/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_token(client):
    return register(client)["token"]


@pytest.fixture
def admin_token(client):
    return register(client, email=unique_email("admin"), role="admin")["token"]
