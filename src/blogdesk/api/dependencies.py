"""Shared API dependencies for authentication and common functionality."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from blogdesk.core.exceptions import (
    ForbiddenError,
    InvalidCredentialError,
    UnauthenticatedError,
    UnknownIdentityError,
)
from blogdesk.core.security import decode_access_token
from blogdesk.db.session import get_db
from blogdesk.models import User
from blogdesk.repositories import PostRepository, UserRepository

logger = logging.getLogger(__name__)

# Missing or non-Bearer headers come through as None; the gate decides.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_post_repository(db: SessionDep) -> PostRepository:
    """Return a post repository bound to the request session."""
    return PostRepository(db)


def get_user_repository(db: SessionDep) -> UserRepository:
    """Return a user repository bound to the request session."""
    return UserRepository(db)


PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]
UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]


def resolve_token(token: str, users: UserRepository) -> User:
    """Decode a bearer token and load the user it names.

    Args:
        token: Raw JWT taken from the Authorization header
        users: User repository

    Returns:
        User object for the token's email claim

    Raises:
        InvalidCredentialError: If the token is malformed, expired or badly signed
        UnknownIdentityError: If no user has the token's email
    """
    email = decode_access_token(token)
    user = users.get_by_email(email)
    if user is None:
        raise UnknownIdentityError()
    return user


def _has_foreign_credential(request: Request) -> bool:
    """Return True if the Authorization header carries a non-Bearer credential."""
    scheme, _, value = request.headers.get("Authorization", "").strip().partition(" ")
    return bool(scheme) and scheme.lower() != "bearer" and bool(value.strip())


def get_current_user(
    request: Request,
    credentials: CredentialsDep,
    users: UserRepoDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        UnauthenticatedError: If no token was sent
        InvalidCredentialError: If the token is invalid or not a Bearer credential
        UnknownIdentityError: If the token's user does not exist
    """
    if credentials is None or not credentials.credentials:
        if _has_foreign_credential(request):
            raise InvalidCredentialError()
        raise UnauthenticatedError()
    return resolve_token(credentials.credentials, users)


def get_optional_user(credentials: CredentialsDep, users: UserRepoDep) -> User | None:
    """Like ``get_current_user`` but any failure means an anonymous request."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return resolve_token(credentials.credentials, users)
    except (InvalidCredentialError, UnknownIdentityError) as exc:
        logger.debug("Ignoring credential on optional-auth route: %s", exc.message)
        return None


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
OptionalUserDep = Annotated[User | None, Depends(get_optional_user)]


def require_admin(current_user: CurrentUserDep) -> User:
    """Allow only admin accounts through.

    Raises:
        ForbiddenError: If the authenticated user is not an admin
    """
    if not current_user.is_admin:
        raise ForbiddenError()
    return current_user


AdminUserDep = Annotated[User, Depends(require_admin)]
