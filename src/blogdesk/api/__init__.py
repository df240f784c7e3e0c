# src/blogdesk/api/__init__.py
"""HTTP API routers."""

from .endpoints import admin_router, auth_router, posts_router, system_router

__all__ = [
    "admin_router",
    "auth_router",
    "posts_router",
    "system_router",
]
