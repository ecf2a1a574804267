"""HTTP middleware for the URL shortener application."""

from app.middleware.logging import RequestLoggingMiddleware

__all__ = ["RequestLoggingMiddleware"]
