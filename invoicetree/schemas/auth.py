"""
Authentication schemas.
"""

from datetime import datetime
from pydantic import EmailStr, Field

from invoicetree.schemas.base import BaseSchema


class LoginRequest(BaseSchema):
    """Sign-in request schema."""

    email: EmailStr
    password: str


class RegisterRequest(BaseSchema):
    """Sign-up request schema."""

    email: EmailStr
    password: str = Field(..., min_length=6, description="Minimum 6 characters")
    full_name: str | None = Field(None, max_length=255)


class TokenPair(BaseSchema):
    """Access and refresh token pair response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseSchema):
    """Refresh token request schema."""

    refresh_token: str


class UserResponse(BaseSchema):
    """Public user data."""

    id: int
    email: EmailStr
    full_name: str | None
    is_active: bool
    created_at: datetime
