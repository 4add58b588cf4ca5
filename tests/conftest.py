"""
Global test fixtures for the EduLift bootstrap.

This module provides shared fixtures for all tests including:
- Mock MongoDB (mongomock / mongomock-motor)
- User document factories
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

import pytest
import pytest_asyncio

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# MongoDB Fixtures (mongomock)
# =============================================================================

@pytest.fixture
def mock_mongo_client():
    """
    Create a mock MongoDB client using mongomock.

    This provides an in-memory MongoDB that behaves like the real thing
    for testing purposes.
    """
    try:
        import mongomock
        client = mongomock.MongoClient()
        yield client
        client.close()
    except ImportError:
        pytest.skip("mongomock not installed")


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
async def mock_edulift_db(mock_async_mongo_client):
    """Provide mock edulift database."""
    yield mock_async_mongo_client["edulift"]


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def minimal_user_document() -> dict:
    """Smallest document the users validator accepts."""
    return {
        "roles": ["student"],
        "email": "jane.doe@example.com",
        "createdAt": datetime.now(timezone.utc),
    }


@pytest.fixture
def full_user_document() -> dict:
    """A user document exercising every declared field."""
    now = datetime.now(timezone.utc)
    return {
        "roles": ["student", "mentor"],
        "groupHomeId": "gh_001",
        "profile": {
            "firstName": "Jane",
            "lastName": "Doe",
            "phoneNumber": "+1234567890",
            "dateOfBirth": "2008-04-12",
            "address": "12 Elm Street, Springfield",
            "emergencyContact": "John Doe",
            "emergencyPhoneNumber": "+1987654321",
            "additionalInfo": {"school": "Springfield High", "grade": 10},
        },
        "consentFlags": {
            "dataProcessingConsent": True,
            "communicationConsent": True,
            "emergencyContactConsent": False,
            "photoVideoConsent": False,
            "consentTimestamp": now,
        },
        "preferences": {
            "language": "es",
            "timezone": "America/Chicago",
            "emailNotifications": True,
            "smsNotifications": True,
            "pushNotifications": False,
            "customPreferences": {"theme": "dark"},
        },
        "riskFlags": ["academic_risk", "housing_risk"],
        "email": "jane.doe@example.com",
        "username": "jdoe",
        "firstName": "Jane",
        "lastName": "Doe",
        "createdAt": now,
        "updatedAt": now,
    }
