"""Bearer token checkpoint for protected routes.

Each request starts unauthenticated. A valid ``Authorization: Bearer`` token
moves it to authenticated with the token's identity attached; anything else
is rejected with a single generic 401 so callers cannot tell which check
failed.
"""

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from loguru import logger

from app.core.security import TokenValidationError, TokenValidator, build_token_validator

BEARER_SCHEME = "bearer"


class AuthState(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True)
class AuthContext:
    """Outcome of the gate for one request."""

    state: AuthState
    identity: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return self.state is AuthState.AUTHENTICATED

    @classmethod
    def anonymous(cls) -> "AuthContext":
        return cls(state=AuthState.UNAUTHENTICATED)

    @classmethod
    def for_identity(cls, identity: str) -> "AuthContext":
        return cls(state=AuthState.AUTHENTICATED, identity=identity)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an Authorization header value, if it is a bearer one."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token:
        return None
    return token


class AuthGate:
    """Validates bearer tokens and decides whether a request may proceed."""

    def __init__(self, validator: TokenValidator):
        self.validator = validator

    def authenticate(self, authorization: Optional[str], now: Optional[float] = None) -> AuthContext:
        """Run the gate over an Authorization header value."""
        token = extract_bearer_token(authorization)
        if token is None:
            logger.debug("Request rejected", reason="missing bearer token")
            return AuthContext.anonymous()

        try:
            identity = self.validator.validate(token, now=now)
        except TokenValidationError as e:
            logger.info("Request rejected", reason=type(e).__name__)
            return AuthContext.anonymous()

        return AuthContext.for_identity(identity)


@lru_cache
def get_auth_gate() -> AuthGate:
    """Return the process-wide gate, built from settings on first use."""
    return AuthGate(build_token_validator())


async def require_identity(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> str:
    """FastAPI dependency for protected routes; returns the caller's identity."""
    context = gate.authenticate(request.headers.get("Authorization"))
    if not context.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return context.identity
