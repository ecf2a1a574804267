"""Tests for the user repository."""

import pytest

from app.repositories.base import DuplicateEntityError
from app.repositories.user_repository import UserRepository
from tests.utils import create_test_user


@pytest.mark.repository
class TestUserRepository:

    @pytest.fixture
    def user_repository(self):
        return UserRepository()

    @pytest.mark.asyncio
    async def test_create_and_get_by_email(self, test_db, user_repository):
        user = await user_repository.create_user(test_db, {
            "username": "alice",
            "email": "alice@example.com",
            "password_hash": "hash",
        })

        found = await user_repository.get_by_email(test_db, "alice@example.com")

        assert found is not None
        assert found.id == user.id
        assert found.username == "alice"

    @pytest.mark.asyncio
    async def test_get_by_email_missing(self, test_db, user_repository):
        assert await user_repository.get_by_email(test_db, "nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self, test_db, user_repository):
        await create_test_user(test_db, email="bob@example.com")

        with pytest.raises(DuplicateEntityError) as excinfo:
            await user_repository.create_user(test_db, {
                "username": "bob2",
                "email": "bob@example.com",
                "password_hash": "hash",
            })

        assert excinfo.value.field_name == "email"
