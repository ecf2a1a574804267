"""Service layer for the URL shortener application.

This package contains service classes implementing the business logic of the application.
Services orchestrate interactions between repositories and provide domain-specific operations.
"""

from app.services.code_generator import CodeGenerator, DigestExhaustedError
from app.services.shortener import ShortenedURLService
from app.services.auth import AuthService

__all__ = ["CodeGenerator", "DigestExhaustedError", "ShortenedURLService", "AuthService"]
