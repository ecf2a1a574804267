"""Stateless authentication tokens and password hashing.

Tokens are HS256 JWTs carrying the claims ``sub``, ``iat`` and ``exp``, signed
with the server secret. Validation checks the signature and the clock; no
session is stored server-side.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Dict, Optional, Union
import time

import bcrypt
import jwt
from jwt.utils import base64url_decode, base64url_encode

from app.core.config import settings

TOKEN_ALGORITHM = "HS256"
REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenValidationError(Exception):
    """Base exception for tokens that cannot be trusted."""
    pass


class InvalidSignatureError(TokenValidationError):
    """The token signature does not match its contents."""
    pass


class TokenExpiredError(TokenValidationError):
    """The token is past its expiry time."""
    pass


class MalformedTokenError(TokenValidationError):
    """The token cannot be parsed into subject, issue time and expiry."""
    pass


@dataclass(frozen=True)
class AuthToken:
    """A signed, time-bounded credential for one identity."""

    subject: str
    issued_at: int
    expires_at: int
    token: str

    @property
    def expires_in(self) -> int:
        """Lifetime of the token in seconds."""
        return self.expires_at - self.issued_at

    def encode(self) -> str:
        """Return the wire form handed to the client."""
        return self.token

    def __str__(self) -> str:
        return self.token


def _secret_bytes(secret_key: Union[str, bytes]) -> bytes:
    if isinstance(secret_key, str):
        secret_key = secret_key.encode("utf-8")
    if not secret_key:
        raise ValueError("secret_key must not be empty")
    return secret_key


class TokenIssuer:
    """Creates signed tokens for authenticated identities."""

    def __init__(self, secret_key: Union[str, bytes], ttl: timedelta):
        self._secret_key = _secret_bytes(secret_key)
        if ttl.total_seconds() <= 0:
            raise ValueError("ttl must be positive")
        self.ttl = ttl

    def issue(self, identity: str, now: Optional[float] = None) -> AuthToken:
        """
        Issue a token for ``identity``.

        Args:
            identity: Subject embedded in the token
            now: Issue time as POSIX seconds, defaults to the current clock

        Returns:
            AuthToken: The signed token
        """
        if not identity:
            raise ValueError("identity must not be empty")

        issued_at = int(time.time() if now is None else now)
        expires_at = issued_at + int(self.ttl.total_seconds())
        token = jwt.encode(
            {"sub": identity, "iat": issued_at, "exp": expires_at},
            self._secret_key,
            algorithm=TOKEN_ALGORITHM,
        )
        return AuthToken(
            subject=identity,
            issued_at=issued_at,
            expires_at=expires_at,
            token=token,
        )


class TokenValidator:
    """Checks signature and expiry of presented tokens."""

    def __init__(self, secret_key: Union[str, bytes]):
        self._secret_key = _secret_bytes(secret_key)
        self._jws = jwt.PyJWS()

    def validate(self, token: str, now: Optional[float] = None) -> str:
        """
        Validate ``token`` and return the identity it was issued for.

        The signature is checked before anything else is read, so a token
        altered anywhere, separators included, fails as InvalidSignatureError.

        Args:
            token: Wire form of the token
            now: Current time as POSIX seconds, defaults to the current clock

        Returns:
            str: The token subject

        Raises:
            MalformedTokenError: If the token is empty or its claims are unusable
            InvalidSignatureError: If the signature does not verify
            TokenExpiredError: If the token has expired
        """
        if not isinstance(token, str) or not token:
            raise MalformedTokenError("Token is empty")

        try:
            self._jws.decode(token, key=self._secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise InvalidSignatureError("Token signature does not verify") from e

        # The decoder ignores trailing bits of the last signature character
        signature = token.encode("utf-8").rsplit(b".", 1)[-1]
        if base64url_encode(base64url_decode(signature)) != signature:
            raise InvalidSignatureError("Token signature is not canonically encoded")

        claims = self._parse_claims(token)

        current = time.time() if now is None else now
        if current > claims["exp"]:
            raise TokenExpiredError("Token has expired")

        return claims["sub"]

    @staticmethod
    def _parse_claims(token: str) -> Dict[str, Any]:
        # Signature already verified; expiry is compared against the caller's clock
        try:
            claims = jwt.decode(
                token,
                options={
                    "verify_signature": False,
                    "verify_exp": False,
                    "verify_iat": False,
                    "require": REQUIRED_CLAIMS,
                },
            )
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Token claims are unusable: {e}") from e

        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            raise MalformedTokenError("Token subject is missing")
        for field in ("iat", "exp"):
            value = claims.get(field)
            if not isinstance(value, int) or isinstance(value, bool):
                raise MalformedTokenError(f"Token claim '{field}' is not an integer")
        return claims


def build_token_issuer() -> TokenIssuer:
    """Create the token issuer from application settings."""
    return TokenIssuer(
        secret_key=settings.SECRET_KEY,
        ttl=timedelta(minutes=settings.TOKEN_EXPIRE_MINUTES),
    )


def build_token_validator() -> TokenValidator:
    """Create the token validator from application settings."""
    return TokenValidator(secret_key=settings.SECRET_KEY)


# bcrypt only uses the first 72 bytes of a password
_BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds or settings.PASSWORD_HASH_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False
