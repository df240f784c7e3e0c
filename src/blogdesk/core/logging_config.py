"""Logging setup for the API process."""

import logging

from blogdesk.core.settings import settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole process.

    Args:
        level: Log level name; defaults to ``settings.log_level``.
    """
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=LOG_FORMAT,
    )
    # uvicorn already logs each access line; ours carries timing.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
