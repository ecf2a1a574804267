"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from app.api.routes import auth, health, urls
from app.core.config import settings

# Create root router
api_router = APIRouter()

# Registration and login
api_router.include_router(
    auth.router,
    prefix=settings.API_PREFIX
)

# Shortening, lookup and redirect routes
api_router.include_router(
    urls.router,
    prefix=settings.API_PREFIX
)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

__all__ = ["api_router"]
