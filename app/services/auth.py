"""Account registration and login.

Passwords are hashed with bcrypt; a successful login yields a stateless
token from TokenIssuer. No session is stored.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import AuthToken, TokenIssuer, hash_password, verify_password
from app.db.session import db_transaction
from app.models.user import User
from app.repositories.base import DuplicateEntityError, RepositoryError
from app.repositories.user_repository import UserRepository
from app.services.exceptions import (
    InvalidCredentialsError,
    UserAlreadyExistsError,
    ServiceError,
)

logger = logging.getLogger(__name__)

# Checked against on unknown emails so both failure paths take the same time
_DUMMY_PASSWORD_HASH = hash_password("dummy-password-for-timing")


class AuthService:
    """Service for user registration and credential checks."""

    def __init__(self, user_repository: UserRepository, token_issuer: TokenIssuer):
        self.user_repository = user_repository
        self.token_issuer = token_issuer

    @db_transaction(db_param_name="db")
    async def register(self, db: AsyncSession, username: str, email: str, password: str) -> User:
        """
        Create a user account. No token is issued.

        Raises:
            UserAlreadyExistsError: If the email is already registered
        """
        email = email.strip().lower()
        try:
            if await self.user_repository.get_by_email(db, email) is not None:
                raise UserAlreadyExistsError("Email is already registered")

            user = await self.user_repository.create_user(db, {
                "username": username,
                "email": email,
                "password_hash": hash_password(password),
            })
        except DuplicateEntityError as e:
            raise UserAlreadyExistsError("Email is already registered") from e
        except RepositoryError as e:
            logger.error(f"Error registering user: {e}")
            raise ServiceError("Failed to register user") from e

        logger.info(f"Registered user {user.id}")
        return user

    async def login(self, db: AsyncSession, email: str, password: str) -> AuthToken:
        """
        Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        try:
            user = await self.user_repository.get_by_email(db, email.strip().lower())
        except RepositoryError as e:
            logger.error(f"Error loading user for login: {e}")
            raise ServiceError("Failed to check credentials") from e

        if user is None:
            verify_password(password, _DUMMY_PASSWORD_HASH)
            raise InvalidCredentialsError("Invalid email or password")
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError("Invalid email or password")

        return self.token_issuer.issue(user.email)
