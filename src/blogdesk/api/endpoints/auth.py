# src/blogdesk/api/endpoints/auth.py
"""Authentication endpoints for the Blogdesk API."""

from __future__ import annotations

from fastapi import APIRouter, status

from blogdesk.api.dependencies import CurrentUserDep, UserRepoDep
from blogdesk.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
)
from blogdesk.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, users: UserRepoDep) -> AuthResponse:
    """Create a regular account and log it in.

    Raises:
        InvalidInputError: If the email is already registered
    """
    user = user_service.register_user(
        users,
        name=payload.name,
        email=payload.email,
        password=payload.password,
    )
    return AuthResponse(
        token=user_service.issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, users: UserRepoDep) -> AuthResponse:
    """Exchange email and password for a bearer token.

    Raises:
        UnknownIdentityError: If the credentials do not match an account
    """
    user = user_service.authenticate(users, email=payload.email, password=payload.password)
    return AuthResponse(
        token=user_service.issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
def read_me(current_user: CurrentUserDep) -> UserResponse:
    """Return the caller's account without the password hash."""
    return UserResponse.model_validate(current_user)


@router.put("/me", response_model=UserResponse)
def update_me(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    users: UserRepoDep,
) -> UserResponse:
    """Change the caller's display name or password."""
    user = user_service.update_profile(
        users,
        current_user,
        name=payload.name,
        password=payload.password,
    )
    return UserResponse.model_validate(user)
