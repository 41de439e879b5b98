"""
Fixtures for integration tests
"""

import pytest
from httpx import ASGITransport, AsyncClient

from prono.core.clock import get_clock
from prono.database import Database, get_database
from prono.main import app


@pytest.fixture
async def client(test_db, fixed_clock):
    """
    HTTP client for testing API endpoints.

    Overrides the database and clock dependencies with the test ones.
    """
    async def override_get_db():
        return test_db

    app.dependency_overrides[get_database] = override_get_db
    app.dependency_overrides[get_clock] = lambda: fixed_clock

    # Health reads the singleton directly
    original_db = Database.db
    Database.db = test_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    Database.db = original_db
    app.dependency_overrides.clear()


@pytest.fixture
async def registered_user(client):
    """A user registered through the API."""
    response = await client.post("/users", json={"username": "Hakimi"})
    return response.json()


@pytest.fixture
async def created_match(client, sample_match_data):
    """A scheduled match created through the admin API."""
    response = await client.post("/admin/matches", json=sample_match_data)
    return response.json()
