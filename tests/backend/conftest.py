"""
Backend-specific test fixtures and configuration.

These fixtures extend the global fixtures with stand-ins for a motor
database, so provisioning can be tested without a MongoDB server.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "backend"))


# =============================================================================
# Database Stand-ins
# =============================================================================

@pytest.fixture
def stub_database(mock_edulift_db):
    """
    Build a motor-like database around a mongomock collection.

    mongomock cannot create collections with validator options, so
    collection-level calls are AsyncMocks while index calls go to a real
    in-memory collection.

    Usage in tests:
        db = stub_database()                       # collection missing
        db = stub_database(existing_options={...}) # collection exists
    """
    def _build(existing_options=None):
        backend = mock_edulift_db["users"]

        collection = MagicMock()
        collection.index_information = backend.index_information
        collection.create_index = backend.create_index
        collection.options = AsyncMock(return_value=existing_options or {})

        db = MagicMock()
        db.list_collection_names = AsyncMock(
            return_value=["users"] if existing_options is not None else []
        )
        db.create_collection = AsyncMock()
        db.command = AsyncMock()
        db.__getitem__.return_value = collection
        db.backend = backend
        return db

    return _build


@pytest.fixture
def users_collection_options():
    """Options MongoDB reports for a correctly provisioned users collection."""
    from edulift.database.databases import edulift_db

    return edulift_db.USERS_VALIDATION_RULE.collection_options()
