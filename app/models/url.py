"""URL shortener data models.

This module defines the ShortURL model for storing shortened URLs in the database.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Index, Text
from sqlmodel import Field, SQLModel


class ShortURLBase(SQLModel):
    """Base model for short URL data."""

    original_url: str = Field(
        description="The original (long) URL to redirect to"
    )
    short_code: str = Field(
        description="Unique code for the shortened URL",
        unique=True,   # Creates the uniqueness constraint the shortener relies on
        max_length=32,
    )


class ShortURL(ShortURLBase, table=True):
    """
    Short URL model for storing shortened URLs in the database.

    A row is created on the first shortening request for a URL and is never
    modified afterwards. The unique index on short_code is what keeps two
    concurrent requests from claiming the same code.
    """

    __tablename__ = "short_urls"

    id: Optional[int] = Field(default=None, primary_key=True)
    original_url: str = Field(
        sa_column=Column(Text, nullable=False),
        description="The original (long) URL to redirect to"
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
        description="Timestamp when this short URL was created"
    )

    __table_args__ = (
        # Reverse lookups go by original_url
        Index("ix_short_urls_original_url", "original_url", postgresql_using="hash"),
    )


class ShortURLCreate(ShortURLBase):
    """Schema for creating a new short URL."""
    pass

