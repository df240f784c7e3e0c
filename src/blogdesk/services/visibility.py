"""Who may see which post, and in what shape.

Admins see everything. Anyone else sees only published posts; anonymous
readers get a truncated preview of premium content. A hidden post is reported
exactly like a missing one.
"""
from __future__ import annotations

from collections.abc import Iterable

from blogdesk.core.exceptions import PostNotFoundError
from blogdesk.models.post import BlogPost
from blogdesk.models.user import User
from blogdesk.schemas.post import PostResponse

PREVIEW_LENGTH = 200
PREVIEW_SUFFIX = "... (Login to read more)"


def premium_preview(content: str) -> str:
    """Cut ``content`` to the anonymous preview; no word-boundary handling."""
    return content[:PREVIEW_LENGTH] + PREVIEW_SUFFIX


def can_view(post: BlogPost, viewer: User | None) -> bool:
    """Return True if ``viewer`` may know that ``post`` exists."""
    if viewer is not None and viewer.is_admin:
        return True
    return post.is_published


def render_post(post: BlogPost, viewer: User | None) -> PostResponse:
    """Shape a post for ``viewer``.

    Raises:
        PostNotFoundError: If the viewer may not see the post.
    """
    if not can_view(post, viewer):
        raise PostNotFoundError(post.id)

    view = PostResponse.model_validate(post)
    if viewer is None and view.is_premium:
        return view.model_copy(
            update={"content": premium_preview(view.content), "is_premium": True}
        )
    return view


def render_posts(posts: Iterable[BlogPost], viewer: User | None) -> list[PostResponse]:
    """Shape a list of posts for ``viewer``, dropping the ones it may not see."""
    return [render_post(post, viewer) for post in posts if can_view(post, viewer)]


def render_published(post: BlogPost | None, viewer: User | None) -> PostResponse:
    """Shape a post for the public read routes, which only serve published posts."""
    if post is None or not post.is_published:
        raise PostNotFoundError(post.id if post is not None else None)
    return render_post(post, viewer)
