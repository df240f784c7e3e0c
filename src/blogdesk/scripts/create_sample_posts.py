# src/blogdesk/scripts/create_sample_posts.py
"""Seed the database with a couple of published posts for local development."""
from __future__ import annotations

import argparse
import sys

from blogdesk.core.settings import settings
from blogdesk.db.session import Database
from blogdesk.models.post import PostStatus
from blogdesk.repositories.post_repo import PostRepository

SAMPLE_POSTS = [
    {
        "title": "Getting Started with Kubernetes",
        "content": "Kubernetes is a powerful container orchestration system...",
        "tags": ["kubernetes", "devops"],
        "categories": ["technology"],
    },
    {
        "title": "Introduction to Docker",
        "content": "Docker is a platform for developing, shipping, and running applications...",
        "tags": ["docker", "containers"],
        "categories": ["technology"],
    },
]


def run(argv: list[str] | None = None, database: Database | None = None) -> int:
    """Insert the sample posts; return a process exit code."""
    parser = argparse.ArgumentParser(description="Create sample blog posts")
    parser.add_argument("--author", default=settings.admin_email or "admin@example.com")
    args = parser.parse_args(argv)

    owns_database = database is None
    db_handle = database or Database(settings.effective_database_url)
    try:
        db_handle.create_tables()
        session = db_handle.session()
        try:
            repo = PostRepository(session)
            for sample in SAMPLE_POSTS:
                post = repo.create(
                    author=args.author,
                    status=PostStatus.PUBLISHED.value,
                    is_premium=False,
                    **sample,
                )
                print(f"Created post: {post.title}")
        finally:
            session.close()
    finally:
        if owns_database:
            db_handle.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(run())
