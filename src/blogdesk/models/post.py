# src/blogdesk/models/post.py
"""SQLAlchemy models for blog posts and their comments."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blogdesk.db.session import Base
from blogdesk.db.time import utcnow

POST_ID_PREFIX = "post:"


class PostStatus(str, Enum):
    """Publication workflow states."""

    DRAFT = "draft"
    PUBLISHED = "published"


def new_post_id() -> str:
    """Return a fresh namespaced post identifier."""
    return f"{POST_ID_PREFIX}{uuid.uuid4().hex}"


def normalize_post_id(post_id: str) -> str:
    """Map a bare or prefixed identifier onto the stored key."""
    if post_id.startswith(POST_ID_PREFIX):
        return post_id
    return f"{POST_ID_PREFIX}{post_id}"


class BlogPost(Base):
    """A post with its reader interactions stored alongside it.

    ``liked_by`` and ``bookmarks`` are JSON lists of user ids treated as sets;
    ``likes`` mirrors ``len(liked_by)``.
    """

    __tablename__ = "blog_post"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_post_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Author email copied at creation time; not a foreign key.
    author: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    categories: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=PostStatus.DRAFT.value, index=True
    )
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    liked_by: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    bookmarks: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    comments: Mapped[list[BlogComment]] = relationship(
        "BlogComment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="BlogComment.seq",
        lazy="selectin",
    )

    @property
    def is_published(self) -> bool:
        """Return True once the post has left the draft state."""
        return self.status == PostStatus.PUBLISHED.value


class BlogComment(Base):
    """A reader comment; lives and dies with its post."""

    __tablename__ = "blog_comment"

    # Insertion order of comments on a post.
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(32), nullable=False)
    post_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("blog_post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(String(64), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped[BlogPost] = relationship("BlogPost", back_populates="comments")
