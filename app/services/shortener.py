"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class which implements business logic
for URL shortening, resolution and listing.
"""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.url import ShortURL
from app.repositories.url_repository import URLRepository
from app.repositories.base import RepositoryError, DuplicateEntityError
from app.services.code_generator import CodeGenerator, DigestExhaustedError
from app.services.exceptions import (
    InvalidURLError,
    CollisionExhaustedError,
    URLNotFoundError,
    URLStoreError,
)
from app.core.config import settings
from app.db.session import db_transaction

logger = logging.getLogger(__name__)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    Codes come from CodeGenerator; on a collision with a different URL the
    next window of the digest is tried, up to ``max_attempts`` windows.
    """

    def __init__(
        self,
        url_repository: URLRepository,
        code_generator: Optional[CodeGenerator] = None,
        max_attempts: Optional[int] = None,
    ):
        """
        Initialize the URL shortening service.

        Args:
            url_repository: Repository for URL data access
            code_generator: Short code generator (defaults to settings-driven one)
            max_attempts: Collision retry bound; None uses every digest window
        """
        self.url_repository = url_repository
        self.code_generator = code_generator or CodeGenerator(length=settings.SHORT_CODE_LENGTH)
        if max_attempts is None:
            max_attempts = settings.SHORT_CODE_MAX_ATTEMPTS
        self.max_attempts = max_attempts or self.code_generator.capacity

    @db_transaction(db_param_name="db")
    async def shorten(self, db: AsyncSession, url: str) -> ShortURL:
        """
        Return the mapping for ``url``, creating it if needed.

        Shortening is idempotent: a URL that was shortened before gets its
        existing mapping back.

        Args:
            db: Database session
            url: The original URL to shorten

        Returns:
            ShortURL: The existing or newly created mapping

        Raises:
            InvalidURLError: If url is empty
            CollisionExhaustedError: If no free code is left within the bound
            URLStoreError: If the store fails
        """
        url = str(url).strip() if url is not None else ""
        if not url:
            raise InvalidURLError("URL must not be empty")

        try:
            existing = await self.url_repository.get_by_original_url(db, url)
            if existing is not None:
                return existing

            for attempt in range(self.max_attempts):
                try:
                    code = self.code_generator.generate(url, attempt)
                except DigestExhaustedError as e:
                    logger.warning(f"Digest exhausted while shortening {url}: {e}")
                    break

                mapping = await self._claim_code(db, code, url)
                if mapping is not None:
                    if attempt > 0:
                        logger.info(f"Short code for {url} resolved after {attempt} collision(s)")
                    return mapping

                logger.info(f"Short code {code} taken by another URL (attempt {attempt})")
        except RepositoryError as e:
            logger.error(f"Error shortening URL: {e}")
            raise URLStoreError("Failed to store URL mapping") from e

        raise CollisionExhaustedError(
            f"No free short code for {url} after {self.max_attempts} attempt(s)"
        )

    async def _claim_code(self, db: AsyncSession, code: str, url: str) -> Optional[ShortURL]:
        """
        Try to bind ``code`` to ``url``.

        Returns the mapping when the code is free or already points at ``url``,
        None when it belongs to a different URL.
        """
        current = await self.url_repository.get_by_short_code(db, code)
        if current is None:
            try:
                return await self.url_repository.create_short_url(
                    db, {"short_code": code, "original_url": url}
                )
            except DuplicateEntityError:
                # Lost a race to a concurrent insert; see who won
                current = await self.url_repository.get_by_short_code(db, code)
                if current is None:
                    raise

        if current.original_url == url:
            return current
        return None

    async def resolve(self, db: AsyncSession, short_code: str) -> str:
        """
        Return the original URL for a short code.

        Raises:
            URLNotFoundError: If the code is unknown
            URLStoreError: If the store fails
        """
        try:
            url = await self.url_repository.get_by_short_code(db, short_code)
        except RepositoryError as e:
            logger.error(f"Error retrieving URL by code: {e}")
            raise URLStoreError("Failed to read URL mapping") from e

        if url is None:
            raise URLNotFoundError(f"URL with code '{short_code}' not found")
        return url.original_url

    async def reverse_lookup(self, db: AsyncSession, original_url: str) -> ShortURL:
        """
        Return the mapping for a previously shortened URL.

        Raises:
            URLNotFoundError: If the URL was never shortened
            URLStoreError: If the store fails
        """
        try:
            url = await self.url_repository.get_by_original_url(db, str(original_url).strip())
        except RepositoryError as e:
            logger.error(f"Error retrieving URL by original: {e}")
            raise URLStoreError("Failed to read URL mapping") from e

        if url is None:
            raise URLNotFoundError(f"URL '{original_url}' has not been shortened")
        return url

    async def list_all(self, db: AsyncSession) -> List[ShortURL]:
        """
        Return every mapping in insertion order.

        Raises:
            URLStoreError: If the store fails
        """
        try:
            return await self.url_repository.list_all(db)
        except RepositoryError as e:
            logger.error(f"Error retrieving URLs list: {e}")
            raise URLStoreError("Failed to list URL mappings") from e
