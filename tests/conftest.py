# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator
from itertools import count
from typing import Any

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="blogdesk-uploads-"))

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from blogdesk.core.security import create_access_token, hash_password
from blogdesk.db.session import Base
from blogdesk.db.session import get_db as app_get_session
from blogdesk.main import app as fastapi_app
from blogdesk.models import BlogPost, PostStatus, User, UserRole

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "password123"

_EMAIL_COUNTER = count(1)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def _make_user(db_session: Session, name: str, role: UserRole) -> User:
    user = User(
        name=name,
        email=f"{role.value}{next(_EMAIL_COUNTER)}@example.com",
        password_hash=hash_password(TEST_PASSWORD, rounds=4),
        role=role.value,
    )
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def bearer(user: User) -> dict[str, str]:
    """Return authorization headers for ``user``."""
    token = create_access_token(user.email, extra_claims={"sub": user.id, "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_user(db_session: Session) -> User:
    """Create and return a persisted admin."""
    return _make_user(db_session, "Admin User", UserRole.ADMIN)


@pytest.fixture()
def reader(db_session: Session) -> User:
    """Create and return a persisted regular user."""
    return _make_user(db_session, "Reader", UserRole.USER)


@pytest.fixture()
def other_reader(db_session: Session) -> User:
    """Create and return a second regular user."""
    return _make_user(db_session, "Other Reader", UserRole.USER)


@pytest.fixture()
def admin_headers(admin_user: User) -> dict[str, str]:
    return bearer(admin_user)


@pytest.fixture()
def reader_headers(reader: User) -> dict[str, str]:
    return bearer(reader)


@pytest.fixture()
def other_reader_headers(other_reader: User) -> dict[str, str]:
    return bearer(other_reader)


@pytest.fixture()
def make_post(db_session: Session, admin_user: User) -> Callable[..., BlogPost]:
    """Return a factory that persists posts with overridable fields."""

    def _make(**overrides: Any) -> BlogPost:
        fields: dict[str, Any] = {
            "title": "Test post",
            "content": "Test post content",
            "author": admin_user.email,
            "tags": ["python"],
            "categories": ["technology"],
            "status": PostStatus.PUBLISHED.value,
            "is_premium": False,
            "likes": 0,
            "liked_by": [],
            "bookmarks": [],
        }
        fields.update(overrides)
        post = BlogPost(**fields)
        db_session.add(post)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make


@pytest.fixture()
def published_post(make_post: Callable[..., BlogPost]) -> BlogPost:
    return make_post(title="Published", content="Open to everyone")


@pytest.fixture()
def draft_post(make_post: Callable[..., BlogPost]) -> BlogPost:
    return make_post(title="Draft", content="Work in progress", status=PostStatus.DRAFT.value)


@pytest.fixture()
def premium_post(make_post: Callable[..., BlogPost]) -> BlogPost:
    return make_post(title="Premium", content="x" * 500, is_premium=True)
