"""Persistence facades over the ORM models."""

from .post_repo import PostRepository
from .user_repo import UserRepository

__all__ = ["PostRepository", "UserRepository"]
