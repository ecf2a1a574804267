"""Test utilities for URL shortener tests."""

import hashlib
import random
import string
from typing import Any, Dict, Optional

from app.models.url import ShortURL
from app.models.user import User

# Subject of tokens minted directly by the test fixtures
TEST_IDENTITY = "tester@example.com"


def constant_digest(data=b""):
    """Hash factory that ignores its input so every URL shares one digest."""
    return hashlib.sha256(b"every url collides")


def random_string(length: int = 10) -> str:
    """Generate a random alphanumeric string."""
    return ''.join(random.choice(string.ascii_letters + string.digits) for _ in range(length))


def random_url() -> str:
    """Generate a random URL for testing."""
    domain = f"{random_string(8)}.com"
    path = random_string(12)
    return f"https://{domain}/{path}"


def create_test_url_data(
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
) -> Dict[str, Any]:
    """Create test data dict for a ShortURL."""
    return {
        "original_url": original_url or random_url(),
        "short_code": short_code or random_string(8),
    }


async def create_test_url(
    db,
    original_url: Optional[str] = None,
    short_code: Optional[str] = None,
) -> ShortURL:
    """Create and persist a test ShortURL in the database."""
    url = ShortURL(**create_test_url_data(original_url=original_url, short_code=short_code))
    db.add(url)
    await db.flush()
    await db.refresh(url)
    return url


async def create_test_user(
    db,
    email: Optional[str] = None,
    username: str = "tester",
    password_hash: str = "not-a-real-hash",
) -> User:
    """Create and persist a test User in the database."""
    user = User(
        username=username,
        email=email or f"{random_string(8).lower()}@example.com",
        password_hash=password_hash,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user
