# src/blogdesk/db/time.py
"""Time utilities for database models."""

import time
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def epoch_millis() -> int:
    """Return the current Unix time in whole milliseconds."""
    return time.time_ns() // 1_000_000
