"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access repositories, service instances and the token components.
"""

from functools import lru_cache

from fastapi import Depends

from app.core.security import TokenIssuer, build_token_issuer
from app.repositories.url_repository import URLRepository
from app.repositories.user_repository import UserRepository
from app.services.auth import AuthService
from app.services.shortener import ShortenedURLService


async def get_url_repository():
    """Get an instance of the URL repository."""
    return URLRepository()


async def get_user_repository():
    """Get an instance of the user repository."""
    return UserRepository()


@lru_cache
def get_token_issuer() -> TokenIssuer:
    """Get the process-wide token issuer."""
    return build_token_issuer()


async def get_shortener_service(
    url_repo: URLRepository = Depends(get_url_repository),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(url_repository=url_repo)


async def get_auth_service(
    user_repo: UserRepository = Depends(get_user_repository),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    """Get an instance of the authentication service."""
    return AuthService(user_repository=user_repo, token_issuer=token_issuer)
