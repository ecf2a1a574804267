"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

# First import SQLModel itself to ensure metadata is initialized
from sqlmodel import SQLModel

from app.models.url import ShortURL, ShortURLBase, ShortURLCreate
from app.models.user import User, UserBase, UserCreate

__all__ = [
    # Short URL models
    "ShortURL",
    "ShortURLBase",
    "ShortURLCreate",

    # User models
    "User",
    "UserBase",
    "UserCreate",
]
