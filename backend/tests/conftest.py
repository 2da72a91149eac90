"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from unittest.mock import MagicMock

import jwt  # PyJWT
import mongomock
from bson import ObjectId

from api.dependencies import reset_container
from modules.auth.repository import UserRepository
from modules.products.repository import ProductRepository
from shared.config import Settings
from shared.database import StoreHealth
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


@pytest.fixture(autouse=True)
def reset_service_container():
    """Reset the service container before and after each test."""
    reset_container()
    yield
    reset_container()


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the cheapest bcrypt cost so hashing does not dominate the suite."""
    monkeypatch.setattr("modules.auth.passwords.BCRYPT_ROUNDS", 4)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a signing secret configured."""
    return Settings(jwt_secret=TEST_JWT_SECRET, mongodb_uri="mongodb://localhost:27017/stockroom_test")


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "64b7f0c2a1e4d3b2c1a09f8e"


@pytest.fixture
def test_user(test_user_id: str) -> AuthenticatedUser:
    """The public view of the test user."""
    return AuthenticatedUser(id=test_user_id, name="Test User", email="test@example.com")


@pytest.fixture
def user_document(test_user_id: str) -> dict:
    """A stored `users` document for the test user."""
    now = datetime.now(timezone.utc)
    return {
        "_id": ObjectId(test_user_id),
        "name": "Test User",
        "email": "test@example.com",
        "avatarUrl": "",
        "role": "user",
        "createdAt": now,
        "updatedAt": now,
    }


@pytest.fixture
def make_token():
    """
    Factory for signed test tokens.

    Usage:
        token = make_token("64b7...", expired=True)
    """
    def _make(user_id: str, expired: bool = False, secret: str = TEST_JWT_SECRET) -> str:
        now = datetime.now(timezone.utc)
        exp = now - timedelta(hours=1) if expired else now + timedelta(days=7)
        payload = {
            "sub": user_id,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Authorization header for routes whose auth dependency is overridden."""
    return {"Authorization": "Bearer test-token"}


@pytest.fixture
def online_store() -> StoreHealth:
    """A store health handle reporting the database as reachable."""
    return StoreHealth(available=True)


@pytest.fixture
def offline_store() -> StoreHealth:
    """A store health handle reporting the database as unreachable."""
    return StoreHealth(available=False)


@pytest.fixture
def mock_db() -> MagicMock:
    """A pymongo Database stand-in; db["name"] yields the same mock collection."""
    return MagicMock()


@pytest.fixture
def mongo_db():
    """
    An in-memory MongoDB database with the unique indexes in place.

    Backed by mongomock, so filters, paging, aggregations and duplicate
    keys behave like the real store.
    """
    client = mongomock.MongoClient(tz_aware=True)
    db = client["stockroom_test"]
    UserRepository(db).ensure_indexes()
    ProductRepository(db).ensure_indexes()
    yield db
    client.close()
