"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations related to ShortURL models.
It is the mapping store behind the shortener: existence checks, lookups in both
directions and inserts guarded by the unique constraint on short_code.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.url import ShortURL, ShortURLCreate
from app.repositories.base import BaseRepository, DuplicateEntityError, RepositoryError


class URLRepository(BaseRepository[ShortURL, ShortURLCreate]):
    """
    Repository for ShortURL model database operations.

    Mappings are append-only: there are no update or delete operations.
    """

    unique_field = "short_code"

    def __init__(self):
        """Initialize the repository with the ShortURL model type."""
        super().__init__(ShortURL)

    async def create_short_url(
        self,
        db: AsyncSession,
        data: Union[ShortURLCreate, Dict[str, Any]]
    ) -> ShortURL:
        """
        Create a new shortened URL entry.

        No existence check is made first: the unique constraint on short_code
        decides which of two concurrent inserts wins.

        Args:
            db: Database session
            data: Short URL data (either as a ShortURLCreate model or dictionary)

        Returns:
            The created ShortURL entity

        Raises:
            DuplicateEntityError: If the short code already exists
            RepositoryError: On other database errors
        """
        return await self.create(db, data)

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[ShortURL]:
        """
        Find a URL by its short code.

        Args:
            db: Database session
            short_code: The unique short code to look up

        Returns:
            The ShortURL if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_one_by(db, short_code=short_code)

    async def get_by_original_url(self, db: AsyncSession, original_url: str) -> Optional[ShortURL]:
        """
        Find the mapping for an original URL.

        Args:
            db: Database session
            original_url: The long URL to look up

        Returns:
            The ShortURL if the URL was shortened before, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.get_one_by(db, original_url=original_url)

    async def check_short_code_exists(self, db: AsyncSession, short_code: str) -> bool:
        """
        Check if a short code is already taken.

        Args:
            db: Database session
            short_code: The short code to check

        Returns:
            True if the short code exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        return await self.exists(db, short_code=short_code)

    async def list_all(self, db: AsyncSession) -> List[ShortURL]:
        """Return every mapping in insertion order."""
        return await self.get_all(db, order_by=self.model_type.id)


__all__ = ["URLRepository", "DuplicateEntityError", "RepositoryError"]
