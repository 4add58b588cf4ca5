"""
Integration test fixtures.

These tests require a running MongoDB (mongomock does not enforce $jsonSchema
validators or plan queries). Point MONGO_URI, the same variable the bootstrap
reads, at a disposable server; each test gets its own throwaway database.
"""
import uuid

import pytest
import pytest_asyncio


@pytest.fixture
def live_mongo_uri():
    """Get connection string for the live MongoDB used in integration tests."""
    from edulift.config import Settings

    return Settings().mongo_uri


@pytest_asyncio.fixture
async def live_db(live_mongo_uri):
    """
    Provide an empty database on a live server, dropped afterwards.

    Skips the test if the server is unreachable.
    """
    from motor.motor_asyncio import AsyncIOMotorClient
    from pymongo.errors import PyMongoError

    client = AsyncIOMotorClient(live_mongo_uri, serverSelectionTimeoutMS=2000)
    try:
        await client.admin.command("ping")
    except PyMongoError:
        client.close()
        pytest.skip(f"No MongoDB reachable at {live_mongo_uri}")

    db_name = f"edulift_it_{uuid.uuid4().hex[:8]}"
    yield client[db_name]

    await client.drop_database(db_name)
    client.close()


@pytest_asyncio.fixture
async def provisioned_users(live_db):
    """Users collection provisioned with the real validator and indexes."""
    from edulift.database.provisioner import provision_users_collection

    await provision_users_collection(live_db)
    yield live_db["users"]
