"""Account helpers: registration, login, profile updates and provisioning."""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from blogdesk.core import security
from blogdesk.core.exceptions import InvalidInputError, UnknownIdentityError
from blogdesk.models.user import User, UserRole
from blogdesk.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)

__all__ = [
    "register_user",
    "authenticate",
    "issue_token",
    "update_profile",
    "ensure_user",
]

# Raised for both unknown email and wrong password.
_LOGIN_FAILED = "Invalid email or password"


def issue_token(user: User) -> str:
    """Return a bearer token identifying ``user`` by email."""
    return security.create_access_token(
        user.email,
        extra_claims={"sub": user.id, "role": user.role},
    )


def register_user(repo: UserRepository, *, name: str, email: str, password: str) -> User:
    """Create a regular account.

    Raises:
        InvalidInputError: If the email is already registered.
    """
    if repo.get_by_email(email) is not None:
        raise InvalidInputError("Email is already registered")
    try:
        return repo.create(
            name=name,
            email=email,
            password_hash=security.hash_password(password),
            role=UserRole.USER,
        )
    except IntegrityError as err:
        raise InvalidInputError("Email is already registered") from err


def authenticate(repo: UserRepository, *, email: str, password: str) -> User:
    """Return the user matching the credentials.

    Raises:
        UnknownIdentityError: If the email is unknown or the password is wrong.
    """
    user = repo.get_by_email(email)
    if user is None or not security.verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise UnknownIdentityError(_LOGIN_FAILED)
    return user


def update_profile(
    repo: UserRepository,
    user: User,
    *,
    name: str | None = None,
    password: str | None = None,
) -> User:
    """Apply the caller's own profile changes."""
    updates: dict[str, object] = {}
    if name is not None:
        updates["name"] = name
    if password is not None:
        updates["password_hash"] = security.hash_password(password)
    if not updates:
        return user

    updated = repo.update(user.id, updates)
    if updated is None:  # pragma: no cover - deleted mid-request
        raise UnknownIdentityError()
    return updated


def ensure_user(
    repo: UserRepository,
    *,
    name: str,
    email: str,
    password: str,
    role: UserRole = UserRole.ADMIN,
) -> tuple[User, bool]:
    """Create an account unless the email already exists.

    Returns:
        The account and whether it was created by this call.
    """
    existing = repo.get_by_email(email)
    if existing is not None:
        return existing, False
    user = repo.create(
        name=name,
        email=email,
        password_hash=security.hash_password(password),
        role=role,
    )
    return user, True
