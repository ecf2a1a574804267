"""User account data models."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class UserBase(SQLModel):
    """Base model for user data."""

    username: str = Field(max_length=50, description="Display name")
    email: str = Field(
        unique=True,
        index=True,
        max_length=255,
        description="Email address; identifies the account"
    )


class User(UserBase, table=True):
    """Registered user. Only the bcrypt hash of the password is stored."""

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(max_length=255)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        sa_type=DateTime(timezone=True),
    )


class UserCreate(UserBase):
    """Schema for creating a new user."""
    password_hash: str

