# src/blogdesk/api/endpoints/__init__.py
"""API endpoint modules."""

from .admin import router as admin_router
from .auth import router as auth_router
from .posts import router as posts_router
from .system import router as system_router

__all__ = [
    "admin_router",
    "auth_router",
    "posts_router",
    "system_router",
]
