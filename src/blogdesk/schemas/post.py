"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from blogdesk.models.post import PostStatus
from blogdesk.schemas.common import CamelModel


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    comment: str = Field("", max_length=5000, description="Comment text")


class CommentResponse(CamelModel):
    """A comment as embedded in a post response."""

    id: str
    user_id: str
    content: str
    created_at: datetime


class PostResponse(CamelModel):
    """Schema for post information returned by the API."""

    id: str
    title: str
    content: str
    author: str
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    status: PostStatus
    image_url: str | None = None
    is_premium: bool = False
    likes: int = 0
    liked_by: list[str] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    bookmarks: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
