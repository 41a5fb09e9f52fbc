"""
Global test fixtures for passport-mongo.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock-motor), one throwaway database per test
- A driver bound to that database
- Seeded user records
"""

import uuid

import pytest
import pytest_asyncio

from passport_mongo import DriverOptions, MongoDbDriver


# =============================================================================
# MongoDB Fixtures (mongomock-motor)
# =============================================================================

@pytest_asyncio.fixture
async def mock_async_mongo_client():
    """
    Create an async mock MongoDB client using mongomock-motor.
    """
    try:
        from mongomock_motor import AsyncMongoMockClient
        client = AsyncMongoMockClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock-motor not installed")


@pytest_asyncio.fixture
async def mock_db(mock_async_mongo_client):
    """Provide a throwaway database on the per-test mock client."""
    yield mock_async_mongo_client[f"tmp{uuid.uuid4().hex[:8]}"]


@pytest_asyncio.fixture
async def driver(mock_db):
    """A driver that has finished initializing."""
    driver = MongoDbDriver(mock_db, DriverOptions())
    await driver.ready()
    return driver


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def atlantis_users() -> list[dict]:
    """Two users: one with a linked facebook account, one without."""
    return [
        {
            "_id": "sheppard",
            "emails": [
                {"value": "sheppard@atlantis.net"},
            ],
            "services": {
                "facebook": {"id": "1"},
            },
        },
        {
            "_id": "mckay",
            "emails": [
                {"value": "mckay@atlantis.net"},
            ],
        },
    ]


@pytest_asyncio.fixture
async def seeded_driver(driver, atlantis_users):
    """Driver whose users collection already holds ``atlantis_users``."""
    await driver.users.insert_many([dict(u) for u in atlantis_users])
    return driver
