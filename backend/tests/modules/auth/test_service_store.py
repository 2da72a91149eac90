"""
Auth service tests against an in-memory MongoDB.

The user repository is real and runs over mongomock, so the unique email
index takes part.
"""

import pytest

from modules.auth.exceptions import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
)
from modules.auth.repository import UserRepository
from modules.auth.service import AuthService


@pytest.fixture
def users(mongo_db) -> UserRepository:
    return UserRepository(mongo_db)


@pytest.fixture
def service(users, test_settings) -> AuthService:
    return AuthService(users, settings=test_settings)


class TestPasswordAccounts:
    @pytest.mark.asyncio
    async def test_register_login_and_validate(self, service):
        registered = await service.register("Ada Lovelace", "ada@example.com", "secret123")

        logged_in = await service.login("ada@example.com", "secret123")
        current = await service.validate_token(logged_in.token)

        assert logged_in.user.id == registered.user.id
        assert current.email == "ada@example.com"

    @pytest.mark.asyncio
    async def test_wrong_password(self, service):
        await service.register("Ada Lovelace", "ada@example.com", "secret123")

        with pytest.raises(InvalidCredentialsError):
            await service.login("ada@example.com", "secret124")

    @pytest.mark.asyncio
    async def test_duplicate_email(self, service, mongo_db):
        await service.register("Ada Lovelace", "ada@example.com", "secret123")

        with pytest.raises(EmailAlreadyRegisteredError):
            await service.register("Ada L.", "ada@example.com", "other-secret")

        assert mongo_db["users"].count_documents({}) == 1

    def test_email_index_rejects_concurrent_duplicate(self, users):
        """A racing insert that passed the lookup is stopped by the index."""
        users.create(name="Ada Lovelace", email="ada@example.com", password_hash="$2b$04$x")

        with pytest.raises(EmailAlreadyRegisteredError):
            users.create(name="Ada L.", email="ada@example.com", password_hash="$2b$04$y")


class TestFederatedAccounts:
    @pytest.mark.asyncio
    async def test_create_then_login(self, service):
        first = await service.login_federated("g-1", "Ada Lovelace", "ada@example.com")
        second = await service.login_federated("g-1", "Ada Lovelace", "ada@example.com")

        assert first.created is True
        assert second.created is False
        assert second.user.id == first.user.id

    @pytest.mark.asyncio
    async def test_links_existing_password_account(self, service, users):
        registered = await service.register("Ada Lovelace", "ada@example.com", "secret123")

        linked = await service.login_federated(
            "g-1", "Ada Lovelace", "ada@example.com", avatar="https://img.example.com/ada.png"
        )

        assert linked.user.id == registered.user.id
        stored = users.get_by_id(registered.user.id)
        assert stored.federated_id == "g-1"
        assert stored.avatar_url == "https://img.example.com/ada.png"
        # The password still works after linking
        assert (await service.login("ada@example.com", "secret123")).user.id == registered.user.id
