# src/blogdesk/services/__init__.py
"""Business logic services for the Blogdesk application."""

from . import interactions, post_service, uploads, user_service, visibility

__all__ = [
    "interactions",
    "post_service",
    "uploads",
    "user_service",
    "visibility",
]
