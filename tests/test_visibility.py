# tests/test_visibility.py
"""Unit tests for the post visibility policy."""

from datetime import UTC, datetime

import pytest

from blogdesk.core.exceptions import PostNotFoundError
from blogdesk.models import BlogPost, PostStatus, User, UserRole
from blogdesk.services.visibility import (
    PREVIEW_LENGTH,
    PREVIEW_SUFFIX,
    can_view,
    premium_preview,
    render_post,
    render_posts,
    render_published,
)

_NOW = datetime(2024, 1, 1, tzinfo=UTC)


def _post(post_id: str = "post:1", **overrides) -> BlogPost:
    fields = {
        "id": post_id,
        "title": "Title",
        "content": "Body",
        "author": "admin@example.com",
        "tags": [],
        "categories": [],
        "status": PostStatus.PUBLISHED.value,
        "image_url": None,
        "is_premium": False,
        "likes": 0,
        "liked_by": [],
        "bookmarks": [],
        "created_at": _NOW,
        "updated_at": _NOW,
    }
    fields.update(overrides)
    return BlogPost(**fields)


def _user(role: UserRole) -> User:
    return User(
        id=f"user:{role.value}",
        name=role.value,
        email=f"{role.value}@example.com",
        password_hash="x",
        role=role.value,
        created_at=_NOW,
    )


ADMIN = _user(UserRole.ADMIN)
READER = _user(UserRole.USER)


def test_premium_preview_cuts_at_fixed_length() -> None:
    preview = premium_preview("a" * 500)
    assert preview == "a" * PREVIEW_LENGTH + PREVIEW_SUFFIX


def test_premium_preview_keeps_short_content_whole() -> None:
    assert premium_preview("short") == "short" + PREVIEW_SUFFIX


@pytest.mark.parametrize(
    ("viewer", "status", "expected"),
    [
        (None, PostStatus.PUBLISHED, True),
        (None, PostStatus.DRAFT, False),
        (READER, PostStatus.PUBLISHED, True),
        (READER, PostStatus.DRAFT, False),
        (ADMIN, PostStatus.DRAFT, True),
        (ADMIN, PostStatus.PUBLISHED, True),
    ],
)
def test_can_view(viewer, status, expected) -> None:
    assert can_view(_post(status=status.value), viewer) is expected


def test_anonymous_viewer_gets_premium_preview() -> None:
    view = render_post(_post(content="x" * 500, is_premium=True), None)
    assert view.content == "x" * 200 + "... (Login to read more)"
    assert view.is_premium is True


@pytest.mark.parametrize("viewer", [READER, ADMIN])
def test_authenticated_viewer_gets_full_premium_content(viewer) -> None:
    view = render_post(_post(content="x" * 500, is_premium=True), viewer)
    assert view.content == "x" * 500


def test_non_premium_content_is_identical_for_everyone() -> None:
    post = _post(content="y" * 500)
    assert render_post(post, None).content == render_post(post, READER).content == "y" * 500


def test_render_draft_for_reader_raises_not_found() -> None:
    with pytest.raises(PostNotFoundError):
        render_post(_post(status=PostStatus.DRAFT.value), READER)


def test_render_posts_drops_hidden_posts() -> None:
    posts = [_post("post:1"), _post("post:2", status=PostStatus.DRAFT.value)]
    assert [view.id for view in render_posts(posts, None)] == ["post:1"]
    assert [view.id for view in render_posts(posts, ADMIN)] == ["post:1", "post:2"]


def test_render_published_rejects_drafts_even_for_admins() -> None:
    with pytest.raises(PostNotFoundError):
        render_published(_post(status=PostStatus.DRAFT.value), ADMIN)


def test_render_published_rejects_missing_post() -> None:
    with pytest.raises(PostNotFoundError):
        render_published(None, ADMIN)
