"""
Test configuration and fixtures.

The app runs against an in-memory SQLite database; every TestClient context
starts the lifespan again and therefore gets an empty database.
"""
import os

# Set test configuration before importing the app
os.environ["DATABASE_URL"] = "sqlite://:memory:"
os.environ["DEFAULT_TIMEZONE"] = "UTC"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "admin-pass"

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from tortoise import Tortoise

from cafe.core.db import MODELS_MODULES
from cafe.main import app


def login(client: TestClient, username: str, password: str) -> dict:
    response = client.post("/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    return login(client, "admin", "admin-pass")


@pytest.fixture
def chef_headers(client, admin_headers):
    roles = client.get("/api/user-roles", headers=admin_headers).json()["data"]
    chef_role_id = next(r["id"] for r in roles if r["role_name"] == "chef")
    response = client.post(
        "/api/users",
        json={"username": "chef", "password": "chef-pass", "role_id": chef_role_id},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return login(client, "chef", "chef-pass")


@pytest_asyncio.fixture
async def db():
    """Initialised ORM on a fresh in-memory database, for service level tests."""
    await Tortoise.init(db_url="sqlite://:memory:", modules={"models": MODELS_MODULES})
    await Tortoise.generate_schemas()
    yield
    await Tortoise.close_connections()
