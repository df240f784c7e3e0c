# src/blogdesk/scripts/create_admin.py
"""
Provision an admin account.

Usage:
    python -m blogdesk.scripts.create_admin --email=admin@example.com --password=secret

Email, password and name fall back to ADMIN_EMAIL, ADMIN_PASSWORD and
ADMIN_NAME. Running it again for an existing email changes nothing.
"""
from __future__ import annotations

import argparse
import sys

from blogdesk.core.settings import settings
from blogdesk.db.session import Database
from blogdesk.models.user import UserRole
from blogdesk.repositories.user_repo import UserRepository
from blogdesk.services.user_service import ensure_user


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an admin user")
    parser.add_argument("--email", default=settings.admin_email)
    parser.add_argument("--password", default=settings.admin_password)
    parser.add_argument("--name", default=settings.admin_name)
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.ADMIN.value,
    )
    return parser


def run(argv: list[str] | None = None, database: Database | None = None) -> int:
    """Create the account; return a process exit code."""
    args = build_parser().parse_args(argv)
    if not args.email or not args.password:
        print(
            "Missing email or password. Provide --email/--password "
            "or ADMIN_EMAIL/ADMIN_PASSWORD.",
            file=sys.stderr,
        )
        return 1

    owns_database = database is None
    db_handle = database or Database(settings.effective_database_url)
    try:
        db_handle.create_tables()
        session = db_handle.session()
        try:
            user, created = ensure_user(
                UserRepository(session),
                name=args.name,
                email=args.email,
                password=args.password,
                role=UserRole(args.role),
            )
        finally:
            session.close()
    finally:
        if owns_database:
            db_handle.dispose()

    if created:
        print(f"Created {user.role} user {user.email} ({user.id})")
    else:
        print(f"User already exists with email: {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(run())
