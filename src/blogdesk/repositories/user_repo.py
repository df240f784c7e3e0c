"""Data access helpers for user accounts."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blogdesk.db.time import utcnow
from blogdesk.models.user import User, UserRole

__all__ = ["UserRepository"]


class UserRepository:
    """Thin wrapper around database access for user entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by identifier."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> User | None:
        """Return a user by exact email match."""
        stmt = select(User).where(User.email == email)
        return self.session.execute(stmt).scalars().first()

    def list_all(self) -> list[User]:
        """Return every user, newest first."""
        stmt = select(User).order_by(User.created_at.desc())
        return list(self.session.execute(stmt).scalars())

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        role: UserRole | str = UserRole.USER,
    ) -> User:
        """Insert a new user.

        Raises:
            IntegrityError: If the email is already registered.
        """
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role.value if isinstance(role, UserRole) else role,
        )
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def update(self, user_id: str, updates: dict[str, Any]) -> User | None:
        """Apply partial updates to a user and stamp ``updated_at``."""
        user = self.get_by_id(user_id)
        if user is None:
            return None
        for key, value in updates.items():
            setattr(user, key, value)
        user.updated_at = utcnow()
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise
        self.session.refresh(user)
        return user

    def delete(self, user_id: str) -> bool:
        """Remove a user; return False if it did not exist."""
        user = self.get_by_id(user_id)
        if user is None:
            return False
        self.session.delete(user)
        self.session.commit()
        return True
