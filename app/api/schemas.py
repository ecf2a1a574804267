"""API request and response schemas.

This module contains Pydantic models for API request validation
and response serialization. JSON bodies use camelCase field names.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema that reads and writes camelCase JSON."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RegisterRequest(CamelModel):
    """Request schema for creating an account."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class UserResponse(CamelModel):
    """Response schema for a registered user."""
    id: int
    username: str
    email: str


class LoginRequest(CamelModel):
    """Request schema for logging in."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(CamelModel):
    """Response schema carrying a bearer token."""
    token: str
    expires_in: int = Field(..., description="Token lifetime in seconds")


class URLRequest(CamelModel):
    """Request schema carrying a long URL."""
    url: HttpUrl

    # Convert HttpUrl to string for SQLAlchemy compatibility
    @field_validator("url")
    def convert_url_to_str(cls, v):
        return str(v)


class URLResponse(CamelModel):
    """Response schema for a URL mapping."""
    original_url: str
    short_url: str = Field(..., description="The short code")


class ErrorResponse(BaseModel):
    """Response schema for errors."""
    detail: str
    error_code: Optional[str] = None
    errors: Optional[List[Dict[str, Any]]] = None
