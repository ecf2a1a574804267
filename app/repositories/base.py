"""Base repository implementation for the URL shortener application.

This module provides a generic BaseRepository class that follows the Repository pattern
for database operations, serving as a foundation for more specific repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union
import logging

from pydantic import BaseModel
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import SQLModel

# Type variable for model types
T = TypeVar("T", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)

logger = logging.getLogger(__name__)


class RepositoryError(Exception):
    """Base exception for repository errors."""
    pass


class DuplicateEntityError(RepositoryError):
    """Exception raised when a unique constraint is violated."""

    def __init__(self, model_type: Type[SQLModel], field_name: str, value: Any):
        self.model_type = model_type
        self.field_name = field_name
        self.value = value
        model_name = getattr(model_type, "__name__", "Entity")
        super().__init__(f"{model_name} with {field_name}={value} already exists")


class BaseRepository(Generic[T, CreateSchemaType]):
    """
    Base repository implementing common operations for SQLModel entities.

    This generic class provides a foundation for specific repositories,
    implementing standard database operations and error handling.

    Type parameters:
        T: The SQLModel type this repository manages
        CreateSchemaType: The Pydantic model type for creation operations
    """

    # Column guarded by the table's unique constraint, reported on conflicts
    unique_field: Optional[str] = None

    def __init__(self, model_type: Type[T]):
        """
        Initialize the repository with a specific model type.

        Args:
            model_type: The SQLModel class this repository will work with
        """
        self.model_type = model_type

    async def get_all(
        self,
        db: AsyncSession,
        order_by: Optional[Any] = None
    ) -> List[T]:
        """
        Get all entities.

        Args:
            db: Database session
            order_by: SQLAlchemy column to order by

        Returns:
            List of entities
        """
        try:
            query = select(self.model_type)
            if order_by is not None:
                query = query.order_by(order_by)

            result = await db.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving {self.model_type.__name__} list: {e}")
            raise RepositoryError(f"Database error retrieving entities: {e}") from e

    async def get_one_by(self, db: AsyncSession, **kwargs) -> Optional[T]:
        """
        Get the first entity matching the given field filters.

        Args:
            db: Database session
            **kwargs: Field=value pairs to filter by

        Returns:
            The entity if found, None otherwise
        """
        try:
            conditions = [getattr(self.model_type, field) == value for field, value in kwargs.items()]
            if not conditions:
                raise ValueError("No conditions provided for lookup")

            query = select(self.model_type).where(*conditions).limit(1)
            result = await db.execute(query)
            return result.scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error looking up {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error retrieving entity: {e}") from e

    async def create(self, db: AsyncSession, data: Union[CreateSchemaType, Dict[str, Any]]) -> T:
        """
        Create a new entity.

        The insert is flushed immediately so unique constraint violations
        surface here rather than at commit time.

        Args:
            db: Database session
            data: Entity data (either as a Pydantic model or dictionary)

        Returns:
            The created entity

        Raises:
            DuplicateEntityError: If a unique constraint is violated
            RepositoryError: On other database errors
        """
        if isinstance(data, BaseModel):
            data_dict = data.model_dump(exclude_unset=True)
        else:
            data_dict = dict(data)

        try:
            entity = self.model_type(**data_dict)
            db.add(entity)
            await db.flush()

            # Refresh to get any default values or generated columns
            await db.refresh(entity)
            return entity
        except IntegrityError as e:
            await db.rollback()
            field = self.unique_field or "unique key"
            logger.info(f"Unique constraint rejected {self.model_type.__name__}: {e.orig}")
            raise DuplicateEntityError(self.model_type, field, data_dict.get(field)) from e
        except SQLAlchemyError as e:
            logger.error(f"Error creating {self.model_type.__name__}: {e}")
            await db.rollback()
            raise RepositoryError(f"Database error creating entity: {e}") from e

    async def count(self, db: AsyncSession) -> int:
        """
        Count the total number of entities.

        Args:
            db: Database session

        Returns:
            Total count of entities

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(func.count()).select_from(self.model_type)
            result = await db.execute(query)
            return result.scalar_one()
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model_type.__name__} records: {e}")
            raise RepositoryError(f"Database error counting entities: {e}") from e

    async def exists(self, db: AsyncSession, **kwargs) -> bool:
        """
        Check if an entity exists with the given filters.

        Args:
            db: Database session
            **kwargs: Field=value pairs to filter by

        Returns:
            True if entity exists, False otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            conditions = []
            for field, value in kwargs.items():
                conditions.append(getattr(self.model_type, field) == value)

            if not conditions:
                raise ValueError("No conditions provided for exists check")

            query = select(func.count()).select_from(self.model_type).where(*conditions)
            result = await db.execute(query)
            count = result.scalar_one()
            return count > 0
        except SQLAlchemyError as e:
            logger.error(f"Error checking existence of {self.model_type.__name__}: {e}")
            raise RepositoryError(f"Database error checking entity existence: {e}") from e
