# src/blogdesk/api/endpoints/admin.py
"""Admin post management and authenticated reader interactions."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile, status

from blogdesk.api.dependencies import (
    AdminUserDep,
    CurrentUserDep,
    OptionalUserDep,
    PostRepoDep,
)
from blogdesk.core.exceptions import PostNotFoundError
from blogdesk.models.post import PostStatus
from blogdesk.schemas.common import ErrorResponse, MessageResponse
from blogdesk.schemas.post import CommentCreate, PostResponse
from blogdesk.services import interactions, post_service
from blogdesk.services.uploads import discard_image, save_image
from blogdesk.services.visibility import render_post, render_posts, render_published

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    responses={
        401: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
)

FormText = Annotated[str | None, Form()]
ImageUpload = Annotated[UploadFile | None, File()]


def _store_image(image: UploadFile | None) -> str | None:
    if image is None or not image.filename:
        return None
    return save_image(image)


@router.post("/posts", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    admin: AdminUserDep,
    posts: PostRepoDep,
    title: Annotated[str, Form()] = "",
    content: Annotated[str, Form()] = "",
    tags: FormText = None,
    categories: FormText = None,
    post_status: Annotated[PostStatus, Form(alias="status")] = PostStatus.DRAFT,
    is_premium: Annotated[str | None, Form(alias="isPremium")] = None,
    image: ImageUpload = None,
) -> PostResponse:
    """Create a post from a multipart form.

    ``tags`` and ``categories`` are JSON arrays and ``isPremium`` a JSON
    boolean, all sent as strings.

    Args:
        admin: Authenticated admin; becomes the post author
        posts: Post repository
        title: Post title
        content: Post body
        tags: JSON array of tags
        categories: JSON array of categories
        post_status: ``draft`` or ``published``
        is_premium: JSON boolean
        image: Optional cover image

    Returns:
        The created post

    Raises:
        InvalidInputError: If title or content is missing, or the image is rejected
    """
    post_service.check_new_post(title, content)
    image_url = _store_image(image)
    try:
        post = post_service.create_post(
            posts,
            author=admin.email,
            title=title,
            content=content,
            status=post_status,
            tags=tags,
            categories=categories,
            is_premium=is_premium,
            image_url=image_url,
        )
    except Exception:
        discard_image(image_url)
        raise
    return render_post(post, admin)


@router.get("/posts", response_model=list[PostResponse])
def list_posts(admin: AdminUserDep, posts: PostRepoDep) -> list[PostResponse]:
    """List every post, drafts included, newest first."""
    return render_posts(posts.list_all(), admin)


@router.get("/posts/status/{post_status}", response_model=list[PostResponse])
def list_posts_by_status(
    post_status: PostStatus,
    admin: AdminUserDep,
    posts: PostRepoDep,
) -> list[PostResponse]:
    """List posts in one workflow state."""
    return render_posts(posts.list_by_status(post_status), admin)


@router.get("/posts/{post_id}", response_model=PostResponse)
def get_post(post_id: str, viewer: OptionalUserDep, posts: PostRepoDep) -> PostResponse:
    """Fetch one post; admins see drafts, everyone else only published posts.

    Raises:
        PostNotFoundError: If the post is missing or hidden from the viewer
    """
    post = posts.get_by_id(post_id)
    if post is None:
        raise PostNotFoundError(post_id)
    return render_post(post, viewer)


@router.put("/posts/{post_id}", response_model=PostResponse)
def update_post(
    post_id: str,
    admin: AdminUserDep,
    posts: PostRepoDep,
    title: FormText = None,
    content: FormText = None,
    tags: FormText = None,
    categories: FormText = None,
    post_status: Annotated[PostStatus | None, Form(alias="status")] = None,
    is_premium: Annotated[str | None, Form(alias="isPremium")] = None,
    image: ImageUpload = None,
) -> PostResponse:
    """Update the fields sent in the multipart form.

    Unparseable ``tags``/``categories``/``isPremium`` keep their stored value.

    Raises:
        PostNotFoundError: If the post does not exist
        InvalidInputError: If title or content is sent blank
    """
    if posts.get_by_id(post_id) is None:
        raise PostNotFoundError(post_id)
    post_service.check_post_edit(title, content)
    image_url = _store_image(image)
    try:
        post = post_service.update_post(
            posts,
            post_id,
            title=title,
            content=content,
            status=post_status,
            tags=tags,
            categories=categories,
            is_premium=is_premium,
            image_url=image_url,
        )
    except Exception:
        discard_image(image_url)
        raise
    return render_post(post, admin)


@router.delete("/posts/{post_id}", response_model=MessageResponse)
def delete_post(post_id: str, admin: AdminUserDep, posts: PostRepoDep) -> MessageResponse:
    """Delete a post and its comments.

    Raises:
        PostNotFoundError: If the post does not exist
    """
    post_service.delete_post(posts, post_id)
    return MessageResponse(message="Blog post deleted successfully")


@router.get("/public/posts", response_model=list[PostResponse])
def list_public_posts(viewer: OptionalUserDep, posts: PostRepoDep) -> list[PostResponse]:
    """List published posts, previewing premium content for anonymous readers."""
    return render_posts(posts.list_by_status(PostStatus.PUBLISHED), viewer)


@router.get("/public/posts/{post_id}", response_model=PostResponse)
def get_public_post(post_id: str, viewer: OptionalUserDep, posts: PostRepoDep) -> PostResponse:
    """Fetch one published post under the visibility policy."""
    return render_published(posts.get_by_id(post_id), viewer)


@router.post("/posts/{post_id}/comments", response_model=PostResponse)
def add_comment(
    post_id: str,
    payload: CommentCreate,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Append a comment by the caller.

    Raises:
        InvalidInputError: If the comment is empty
        PostNotFoundError: If the post is missing or hidden from the caller
    """
    post = interactions.add_comment(posts, post_id, current_user, payload.comment)
    return render_post(post, current_user)


@router.post("/posts/{post_id}/like", response_model=PostResponse)
def toggle_like(post_id: str, current_user: CurrentUserDep, posts: PostRepoDep) -> PostResponse:
    """Like the post, or remove the caller's like if already present."""
    post = interactions.toggle_like(posts, post_id, current_user)
    return render_post(post, current_user)


@router.post("/posts/{post_id}/bookmark", response_model=PostResponse)
def toggle_bookmark(
    post_id: str,
    current_user: CurrentUserDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Bookmark the post, or remove the caller's bookmark if already present."""
    post = interactions.toggle_bookmark(posts, post_id, current_user)
    return render_post(post, current_user)


@router.get("/user/bookmarks", response_model=list[PostResponse])
def list_bookmarks(current_user: CurrentUserDep, posts: PostRepoDep) -> list[PostResponse]:
    """List the posts the caller bookmarked."""
    return render_posts(posts.list_bookmarked_by(current_user.id), current_user)


@router.get("/user/likes", response_model=list[PostResponse])
def list_likes(current_user: CurrentUserDep, posts: PostRepoDep) -> list[PostResponse]:
    """List the posts the caller liked."""
    return render_posts(posts.list_liked_by(current_user.id), current_user)
