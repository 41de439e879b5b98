"""
Pytest fixtures and configuration for all tests.
"""

import pytest
from typing import AsyncGenerator
from mongomock_motor import AsyncMongoMockClient
from motor.motor_asyncio import AsyncIOMotorDatabase

from prono.core.clock import FixedClock
from prono.database import create_indexes
from tests.factories import KICKOFF, NOW

TEST_DB_NAME = "prono_test"


@pytest.fixture
async def test_db() -> AsyncGenerator[AsyncIOMotorDatabase, None]:
    """
    Provide a clean in-memory database for each test.

    Indexes are created so unique constraints behave like production.
    """
    client = AsyncMongoMockClient()
    db = client[TEST_DB_NAME]
    await create_indexes(db)

    yield db

    collection_names = await db.list_collection_names()
    for collection_name in collection_names:
        await db[collection_name].drop()


@pytest.fixture
def fixed_clock():
    return FixedClock(NOW)


@pytest.fixture
def sample_match_data():
    """Sample match creation payload (JSON shaped)."""
    return {
        "team_a": "Maroc",
        "team_b": "Sénégal",
        "match_date": KICKOFF.isoformat(),
        "players": [
            {"name": "Achraf Hakimi", "team": "A"},
            {"name": "Youssef En-Nesyri", "team": "A"},
            {"name": "Sadio Mané", "team": "B"},
            {"name": "Nicolas Jackson", "team": "B"},
        ]
    }
