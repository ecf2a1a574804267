"""Tests for registration and login."""

from datetime import timedelta

import pytest

from app.core.security import TokenIssuer, TokenValidator
from app.repositories.user_repository import UserRepository
from app.services.auth import AuthService
from app.services.exceptions import InvalidCredentialsError, UserAlreadyExistsError

SECRET = "auth-service-secret-0123456789abcd"


@pytest.mark.service
class TestAuthService:

    @pytest.fixture
    def auth_service(self):
        return AuthService(UserRepository(), TokenIssuer(SECRET, timedelta(minutes=30)))

    @pytest.mark.asyncio
    async def test_register(self, test_db, auth_service):
        user = await auth_service.register(test_db, "alice", "Alice@Example.com", "s3cret-pass")

        assert user.id is not None
        assert user.email == "alice@example.com"
        assert user.password_hash != "s3cret-pass"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, test_db, auth_service):
        await auth_service.register(test_db, "alice", "alice@example.com", "s3cret-pass")

        with pytest.raises(UserAlreadyExistsError):
            await auth_service.register(test_db, "alice2", "ALICE@example.com", "other-pass")

    @pytest.mark.asyncio
    async def test_login_issues_token(self, test_db, auth_service):
        await auth_service.register(test_db, "alice", "alice@example.com", "s3cret-pass")

        token = await auth_service.login(test_db, "alice@example.com", "s3cret-pass")

        assert token.subject == "alice@example.com"
        assert token.expires_in == 30 * 60
        assert TokenValidator(SECRET).validate(token.encode()) == "alice@example.com"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, test_db, auth_service):
        await auth_service.register(test_db, "alice", "alice@example.com", "s3cret-pass")

        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(test_db, "alice@example.com", "wrong-pass")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, test_db, auth_service):
        with pytest.raises(InvalidCredentialsError) as excinfo:
            await auth_service.login(test_db, "nobody@example.com", "whatever")

        assert str(excinfo.value) == "Invalid email or password"
