# src/blogdesk/models/__init__.py
"""SQLAlchemy models for the Blogdesk application."""

from .post import BlogComment, BlogPost, PostStatus, normalize_post_id
from .user import User, UserRole

__all__ = [
    "BlogComment", "BlogPost", "PostStatus", "normalize_post_id",
    "User", "UserRole",
]
