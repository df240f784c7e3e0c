# src/blogdesk/api/endpoints/posts.py
"""Public read endpoints for published posts."""

from fastapi import APIRouter

from blogdesk.api.dependencies import OptionalUserDep, PostRepoDep
from blogdesk.models.post import PostStatus
from blogdesk.schemas.common import ErrorResponse
from blogdesk.schemas.post import PostResponse
from blogdesk.services.visibility import render_posts, render_published

router = APIRouter(prefix="/posts", tags=["posts"], responses={404: {"model": ErrorResponse}})


@router.get("", response_model=list[PostResponse])
def list_posts(viewer: OptionalUserDep, posts: PostRepoDep) -> list[PostResponse]:
    """List published posts, newest first.

    Anonymous readers get a preview of premium posts; a valid token unlocks
    the full content.

    Args:
        viewer: Authenticated user, or None for anonymous requests
        posts: Post repository

    Returns:
        Published posts shaped for the viewer
    """
    return render_posts(posts.list_by_status(PostStatus.PUBLISHED), viewer)


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: str, viewer: OptionalUserDep, posts: PostRepoDep) -> PostResponse:
    """Get a published post by bare or prefixed ID.

    Raises:
        PostNotFoundError: If the post is missing or not published
    """
    return render_published(posts.get_by_id(post_id), viewer)
