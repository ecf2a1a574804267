"""Repository layer for the URL shortener application.

This package contains repository classes implementing data access logic
for each model in the application.
"""

from app.repositories.base import BaseRepository, RepositoryError, DuplicateEntityError
from app.repositories.url_repository import URLRepository
from app.repositories.user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "RepositoryError",
    "DuplicateEntityError",
    "URLRepository",
    "UserRepository",
]
