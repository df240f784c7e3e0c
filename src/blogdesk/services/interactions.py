"""Reader interactions: comments, likes and bookmarks.

Each operation loads one post under a row lock, edits it in memory and
commits. The membership lists are always replaced, never mutated in place,
so the JSON columns register the change.
"""
from __future__ import annotations

from blogdesk.core.exceptions import InvalidInputError, PostNotFoundError
from blogdesk.db.time import epoch_millis, utcnow
from blogdesk.models.post import BlogComment, BlogPost
from blogdesk.models.user import User
from blogdesk.repositories.post_repo import PostRepository
from blogdesk.services.visibility import can_view


def _load_visible(repo: PostRepository, post_id: str, user: User) -> BlogPost:
    post = repo.get_for_update(post_id)
    if post is None or not can_view(post, user):
        raise PostNotFoundError(post_id)
    return post


def add_comment(repo: PostRepository, post_id: str, user: User, text: str) -> BlogPost:
    """Append a comment by ``user`` to the post.

    Raises:
        InvalidInputError: If ``text`` is blank.
        PostNotFoundError: If the post is missing or hidden from ``user``.
    """
    if not text or not text.strip():
        raise InvalidInputError("Comment is required")

    post = _load_visible(repo, post_id, user)
    post.comments.append(
        BlogComment(
            id=str(epoch_millis()),
            user_id=user.id,
            content=text,
            created_at=utcnow(),
        )
    )
    return repo.save(post, touch=False)


def toggle_like(repo: PostRepository, post_id: str, user: User) -> BlogPost:
    """Add or remove ``user`` from the post's likes; ``likes`` follows the set size."""
    post = _load_visible(repo, post_id, user)
    liked_by = list(post.liked_by or [])
    if user.id in liked_by:
        liked_by = [member for member in liked_by if member != user.id]
    else:
        liked_by.append(user.id)
    post.liked_by = liked_by
    post.likes = len(liked_by)
    return repo.save(post, touch=False)


def toggle_bookmark(repo: PostRepository, post_id: str, user: User) -> BlogPost:
    """Add or remove ``user`` from the post's bookmarks."""
    post = _load_visible(repo, post_id, user)
    bookmarks = list(post.bookmarks or [])
    if user.id in bookmarks:
        bookmarks = [member for member in bookmarks if member != user.id]
    else:
        bookmarks.append(user.id)
    post.bookmarks = bookmarks
    return repo.save(post, touch=False)
