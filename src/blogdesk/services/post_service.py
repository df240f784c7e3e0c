"""Service-level helpers for the editorial side of posts."""
from __future__ import annotations

import json
import logging

from blogdesk.core.exceptions import InvalidInputError, PostNotFoundError
from blogdesk.models.post import BlogPost, PostStatus
from blogdesk.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)


def parse_string_list(raw: str | None, field: str, fallback: list[str]) -> list[str]:
    """Decode a JSON array of strings sent as a form field.

    Malformed input does not fail the request: it is logged and ``fallback``
    is returned instead. Duplicates are dropped, first occurrence wins.

    Args:
        raw: The raw form value, or None when the field was not sent.
        field: Field name used in the log line.
        fallback: Value to use when ``raw`` is missing or unparseable.

    Returns:
        The decoded list.
    """
    if raw is None:
        return list(fallback)
    try:
        value = json.loads(raw)
    except ValueError:
        value = None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        logger.warning("Discarding unparseable %s value %r, using %r", field, raw, fallback)
        return list(fallback)
    return list(dict.fromkeys(value))


def parse_flag(raw: str | None, field: str, fallback: bool) -> bool:
    """Decode a JSON boolean sent as a form field, falling back like ``parse_string_list``."""
    if raw is None:
        return fallback
    try:
        value = json.loads(raw)
    except ValueError:
        value = None
    if not isinstance(value, bool):
        logger.warning("Discarding unparseable %s value %r, using %r", field, raw, fallback)
        return fallback
    return value


def check_new_post(title: str, content: str) -> None:
    """Raise InvalidInputError unless both title and content have text."""
    if not title.strip() or not content.strip():
        raise InvalidInputError("Title and content are required")


def check_post_edit(title: str | None, content: str | None) -> None:
    """Raise InvalidInputError if title or content is sent blank."""
    if title is not None and not title.strip():
        raise InvalidInputError("Title cannot be empty")
    if content is not None and not content.strip():
        raise InvalidInputError("Content cannot be empty")


def create_post(
    repo: PostRepository,
    *,
    author: str,
    title: str,
    content: str,
    status: PostStatus = PostStatus.DRAFT,
    tags: str | None = None,
    categories: str | None = None,
    is_premium: str | None = None,
    image_url: str | None = None,
) -> BlogPost:
    """Create a post from multipart form values.

    Raises:
        InvalidInputError: If title or content is blank.
    """
    check_new_post(title, content)

    return repo.create(
        title=title,
        content=content,
        author=author,
        tags=parse_string_list(tags, "tags", []),
        categories=parse_string_list(categories, "categories", []),
        status=status.value,
        image_url=image_url,
        is_premium=parse_flag(is_premium, "isPremium", False),
        likes=0,
        liked_by=[],
        bookmarks=[],
    )


def update_post(
    repo: PostRepository,
    post_id: str,
    *,
    title: str | None = None,
    content: str | None = None,
    status: PostStatus | None = None,
    tags: str | None = None,
    categories: str | None = None,
    is_premium: str | None = None,
    image_url: str | None = None,
) -> BlogPost:
    """Replace the fields that were sent; everything else keeps its value.

    Raises:
        PostNotFoundError: If the identifier does not resolve.
        InvalidInputError: If title or content is sent blank.
    """
    post = repo.get_by_id(post_id)
    if post is None:
        raise PostNotFoundError(post_id)

    check_post_edit(title, content)

    updates: dict[str, object] = {}
    if title is not None:
        updates["title"] = title
    if content is not None:
        updates["content"] = content
    if status is not None:
        updates["status"] = status.value
    if tags is not None:
        updates["tags"] = parse_string_list(tags, "tags", post.tags or [])
    if categories is not None:
        updates["categories"] = parse_string_list(categories, "categories", post.categories or [])
    if is_premium is not None:
        updates["is_premium"] = parse_flag(is_premium, "isPremium", bool(post.is_premium))
    if image_url is not None:
        updates["image_url"] = image_url

    updated = repo.update(post.id, updates)
    if updated is None:  # pragma: no cover - deleted between read and write
        raise PostNotFoundError(post_id)
    return updated


def delete_post(repo: PostRepository, post_id: str) -> None:
    """Delete a post.

    Raises:
        PostNotFoundError: If the identifier does not resolve.
    """
    if not repo.delete(post_id):
        raise PostNotFoundError(post_id)
