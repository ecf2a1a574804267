"""Basic tests to verify test DB setup."""

from datetime import timedelta

import pytest
from sqlalchemy import select, text
from sqlalchemy.exc import IntegrityError

from app.models.url import ShortURL
from app.models.user import User


@pytest.mark.asyncio
async def test_create_tables(test_db):
    """Verify tables are created correctly in test database."""
    result = await test_db.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))
    tables = [row[0] for row in result.fetchall()]
    assert "short_urls" in tables
    assert "users" in tables

    url = ShortURL(original_url="https://example.com", short_code="test1234")
    test_db.add(url)
    await test_db.commit()

    result = await test_db.execute(select(ShortURL).where(ShortURL.short_code == "test1234"))
    retrieved_url = result.scalars().first()

    assert retrieved_url is not None
    assert retrieved_url.original_url == "https://example.com"
    assert retrieved_url.created_at is not None


@pytest.mark.asyncio
async def test_short_code_is_unique(test_db):
    """The database itself rejects a second row with the same short code."""
    test_db.add(ShortURL(original_url="https://example.com/one", short_code="samecode"))
    await test_db.flush()

    test_db.add(ShortURL(original_url="https://example.com/two", short_code="samecode"))
    with pytest.raises(IntegrityError):
        await test_db.flush()
    await test_db.rollback()


@pytest.mark.parametrize("model,fields", [
    (ShortURL, {"original_url": "https://example.com", "short_code": "tzaware1"}),
    (User, {"username": "tz", "email": "tz@example.com", "password_hash": "x"}),
])
def test_created_at_is_timezone_aware(model, fields):
    """Timestamps default to aware UTC and map to a timezone-aware column."""
    instance = model(**fields)

    assert instance.created_at.tzinfo is not None
    assert instance.created_at.utcoffset() == timedelta(0)
    assert model.__table__.c.created_at.type.timezone is True


@pytest.mark.asyncio
async def test_insert_with_default_timestamps(test_db):
    test_db.add(ShortURL(original_url="https://example.com/ts", short_code="stamped1"))
    test_db.add(User(username="stamp", email="stamp@example.com", password_hash="x"))
    await test_db.commit()

    result = await test_db.execute(select(ShortURL).where(ShortURL.short_code == "stamped1"))
    assert result.scalars().first().created_at is not None
