"""Deterministic short code generation.

A code is a fixed-width window into the URL-safe base64 encoding of the URL's
SHA-256 digest. Attempt 0 takes the first window, attempt 1 the next one, and
so on, so the same (url, attempt) pair always yields the same code.
"""

import base64
import hashlib
from typing import Callable


class DigestExhaustedError(Exception):
    """The requested attempt lies beyond the end of the encoded digest."""

    def __init__(self, attempt: int, capacity: int):
        self.attempt = attempt
        self.capacity = capacity
        super().__init__(
            f"Attempt {attempt} exceeds digest capacity of {capacity} codes"
        )


class CodeGenerator:
    """Derive candidate short codes from a URL digest.

    Args:
        length: Number of characters per code
        hash_factory: hashlib-style constructor for the digest
    """

    def __init__(self, length: int = 8, hash_factory: Callable = hashlib.sha256):
        if length < 1:
            raise ValueError("length must be positive")
        self.length = length
        self.hash_factory = hash_factory

    @property
    def capacity(self) -> int:
        """How many distinct windows one digest provides."""
        return len(self._encode(b"")) // self.length

    def generate(self, url: str, attempt: int = 0) -> str:
        """
        Return the candidate code for ``url`` at ``attempt``.

        Raises:
            ValueError: If url is empty or attempt is negative
            DigestExhaustedError: If the window falls outside the encoded digest
        """
        if not url:
            raise ValueError("url must not be empty")
        if attempt < 0:
            raise ValueError("attempt must not be negative")

        encoded = self._encode(url.encode("utf-8"))
        start = attempt * self.length
        end = start + self.length
        if end > len(encoded):
            raise DigestExhaustedError(attempt, len(encoded) // self.length)
        return encoded[start:end]

    def _encode(self, data: bytes) -> str:
        digest = self.hash_factory(data).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
