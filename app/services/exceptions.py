"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class URLError(ServiceError):
    """Base exception for URL-related errors."""
    pass


class InvalidURLError(URLError):
    """The URL is empty or otherwise unusable."""
    pass


class URLCreationError(URLError):
    """Error occurred during URL creation."""
    pass


class CollisionExhaustedError(URLCreationError):
    """Every allowed short code for the URL is taken by other URLs.

    Retryable by the caller; it is not the client's fault.
    """
    pass


class URLNotFoundError(URLError):
    """No mapping exists for the given short code or URL."""
    pass


class URLStoreError(URLError):
    """The mapping store failed; surfaced as an opaque server error."""
    pass


class AuthError(ServiceError):
    """Base exception for account and credential errors."""
    pass


class UserAlreadyExistsError(AuthError):
    """An account with this email is already registered."""
    pass


class InvalidCredentialsError(AuthError):
    """Email or password is wrong. Deliberately does not say which."""
    pass
