"""Data access helpers for working with blog posts."""
from __future__ import annotations

import json
from typing import Any

from sqlalchemy import String, cast, select
from sqlalchemy.orm import Session

from blogdesk.db.time import utcnow
from blogdesk.models.post import BlogPost, PostStatus, normalize_post_id

__all__ = ["PostRepository"]

# Columns callers may replace through ``update``.
UPDATABLE_FIELDS = frozenset(
    {
        "title",
        "content",
        "author",
        "tags",
        "categories",
        "status",
        "image_url",
        "is_premium",
        "likes",
        "liked_by",
        "bookmarks",
    }
)


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> BlogPost | None:
        """Return a post by bare or prefixed identifier."""
        stmt = select(BlogPost).where(BlogPost.id == normalize_post_id(post_id))
        return self.session.execute(stmt).scalars().first()

    def get_for_update(self, post_id: str) -> BlogPost | None:
        """Return a post with its row locked until the next commit.

        Backends without row locks (SQLite) ignore the lock clause.
        """
        stmt = (
            select(BlogPost)
            .where(BlogPost.id == normalize_post_id(post_id))
            .with_for_update()
        )
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> list[BlogPost]:
        """Return every post, newest first."""
        stmt = select(BlogPost).order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        return list(self.session.execute(stmt).scalars())

    def list_by_status(self, status: PostStatus | str) -> list[BlogPost]:
        """Return posts in the given workflow state, newest first."""
        value = status.value if isinstance(status, PostStatus) else status
        stmt = (
            select(BlogPost)
            .where(BlogPost.status == value)
            .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def list_by_author(self, author: str) -> list[BlogPost]:
        """Return posts whose denormalized author email matches exactly."""
        stmt = (
            select(BlogPost)
            .where(BlogPost.author == author)
            .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        )
        return list(self.session.execute(stmt).scalars())

    def _list_with_member(self, column: Any, attr: str, user_id: str) -> list[BlogPost]:
        # Text match on the serialized JSON narrows the rows in SQL; the exact
        # membership test runs on the decoded list.
        stmt = (
            select(BlogPost)
            .where(cast(column, String).contains(json.dumps(user_id)))
            .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
        )
        return [
            post
            for post in self.session.execute(stmt).scalars()
            if user_id in (getattr(post, attr) or [])
        ]

    def list_bookmarked_by(self, user_id: str) -> list[BlogPost]:
        """Return posts whose bookmark set contains ``user_id``."""
        return self._list_with_member(BlogPost.bookmarks, "bookmarks", user_id)

    def list_liked_by(self, user_id: str) -> list[BlogPost]:
        """Return posts whose like set contains ``user_id``."""
        return self._list_with_member(BlogPost.liked_by, "liked_by", user_id)

    def create(self, **fields: Any) -> BlogPost:
        """Insert a new post and return the persisted ORM instance."""
        post = BlogPost(**fields)
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def update(self, post_id: str, updates: dict[str, Any]) -> BlogPost | None:
        """Replace the given fields and stamp ``updated_at``.

        The identifier and creation time are never touched.

        Returns:
            The updated post, or None if the identifier does not resolve.

        Raises:
            ValueError: If ``updates`` names a field that cannot be replaced.
        """
        unknown = set(updates) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")

        post = self.get_by_id(post_id)
        if post is None:
            return None
        for key, value in updates.items():
            setattr(post, key, value)
        post.updated_at = utcnow()
        self.session.commit()
        self.session.refresh(post)
        return post

    def save(self, post: BlogPost, *, touch: bool = True) -> BlogPost:
        """Commit pending changes on ``post``.

        Args:
            post: A post loaded through this repository's session.
            touch: Stamp ``updated_at``; reader interactions pass False so the
                timestamp keeps tracking editorial changes only.
        """
        if touch:
            post.updated_at = utcnow()
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post_id: str) -> bool:
        """Delete a post and its comments; return False if it did not exist."""
        post = self.get_by_id(post_id)
        if post is None:
            return False
        self.session.delete(post)
        self.session.commit()
        return True
