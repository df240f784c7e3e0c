# src/blogdesk/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorResponse, MessageResponse
from .post import CommentCreate, CommentResponse, PostResponse
from .user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "ErrorResponse", "MessageResponse",
    "CommentCreate", "CommentResponse", "PostResponse",
    "AuthResponse", "LoginRequest", "ProfileUpdateRequest", "RegisterRequest",
    "UserResponse",
]
