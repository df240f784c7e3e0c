"""Database handle and session configuration."""

from __future__ import annotations

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

_IN_MEMORY_SQLITE_URLS = {"sqlite://", "sqlite:///:memory:"}


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import blogdesk.models  # noqa: E402,F401


class Database:
    """Owns the engine and session factory for one application process.

    Built once at startup, stored on ``app.state.database`` and disposed at
    shutdown.
    """

    def __init__(self, url: str, *, echo: bool = False, connect_timeout: int = 10) -> None:
        self.url = url
        self.engine: Engine = create_engine(url, **_engine_options(url, echo, connect_timeout))
        self.SessionLocal = sessionmaker(autoflush=False, bind=self.engine)

    def session(self) -> Session:
        """Open a new ORM session bound to this database."""
        return self.SessionLocal()

    def create_tables(self) -> None:
        """Create all database tables."""
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all database tables."""
        Base.metadata.drop_all(bind=self.engine)

    def ping(self) -> bool:
        """Return True if a round trip to the database succeeds."""
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()


def _engine_options(url: str, echo: bool, connect_timeout: int) -> dict[str, object]:
    options: dict[str, object] = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": connect_timeout,
        }
        if url in _IN_MEMORY_SQLITE_URLS:
            options["poolclass"] = StaticPool
    else:
        options["connect_args"] = {"connect_timeout": connect_timeout}
    return options


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
