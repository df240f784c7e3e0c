"""User-related Pydantic schemas."""

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from blogdesk.models.user import UserRole
from blogdesk.schemas.common import CamelModel

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _check_email(value: str) -> str:
    value = value.strip()
    if not _EMAIL_PATTERN.match(value):
        raise ValueError("Email must be a valid address")
    return value


class UserResponse(CamelModel):
    """Sanitized user record; never carries the password hash."""

    id: str
    name: str
    email: str
    role: UserRole
    created_at: datetime
    updated_at: datetime | None = None


class RegisterRequest(BaseModel):
    """Schema for self-registration."""

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=8, max_length=128)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Reject strings that are obviously not email addresses."""
        return _check_email(v)


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=1, max_length=128)


class AuthResponse(BaseModel):
    """Token and profile returned after login or registration."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    """Schema for updating the caller's own profile."""

    name: str | None = Field(None, min_length=1, max_length=100)
    password: str | None = Field(None, min_length=8, max_length=128)
