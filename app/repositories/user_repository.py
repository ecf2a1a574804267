"""User Repository for the URL shortener application."""

from typing import Any, Dict, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User, UserCreate
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User, UserCreate]):
    """Repository for User model database operations."""

    unique_field = "email"

    def __init__(self):
        super().__init__(User)

    async def create_user(self, db: AsyncSession, data: Union[UserCreate, Dict[str, Any]]) -> User:
        """
        Create a user account.

        Raises:
            DuplicateEntityError: If the email is already registered
            RepositoryError: On other database errors
        """
        return await self.create(db, data)

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        """Find a user by email address."""
        return await self.get_one_by(db, email=email)
