# src/blogdesk/models/user.py
"""SQLAlchemy model for user accounts."""

from __future__ import annotations

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from blogdesk.db.session import Base
from blogdesk.db.time import utcnow

USER_ID_PREFIX = "user:"


class UserRole(str, Enum):
    """Roles a user account can hold."""

    USER = "user"
    ADMIN = "admin"


def new_user_id() -> str:
    """Return a fresh namespaced user identifier."""
    return f"{USER_ID_PREFIX}{uuid.uuid4()}"


class User(Base):
    """A registered account. Posts refer to it by email, not by key."""

    __tablename__ = "blog_user"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_user_id)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Case-sensitive; stored exactly as provided.
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default=UserRole.USER.value)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    @property
    def is_admin(self) -> bool:
        """Return True if the account holds the admin role."""
        return self.role == UserRole.ADMIN.value
