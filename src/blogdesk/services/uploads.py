"""Storage for images attached to posts."""
from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path

from fastapi import UploadFile

from blogdesk.core.exceptions import InvalidInputError
from blogdesk.core.settings import settings

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 64 * 1024
_SAFE_SUFFIX = re.compile(r"^\.[a-z0-9]{1,8}$")


def upload_root() -> Path:
    """Return the upload directory, creating it if needed."""
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _suffix_for(filename: str | None) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if _SAFE_SUFFIX.match(suffix) else ""


def save_image(upload: UploadFile) -> str:
    """Persist an uploaded image and return its public URL path.

    Raises:
        InvalidInputError: If the file is not an image or is too large.
    """
    content_type = upload.content_type or ""
    if not content_type.startswith("image/"):
        raise InvalidInputError("Uploaded file must be an image")

    name = f"{uuid.uuid4().hex}{_suffix_for(upload.filename)}"
    target = upload_root() / name
    written = 0
    with target.open("wb") as out:
        while chunk := upload.file.read(CHUNK_SIZE):
            written += len(chunk)
            if written > settings.max_upload_bytes:
                break
            out.write(chunk)

    if written > settings.max_upload_bytes:
        target.unlink(missing_ok=True)
        raise InvalidInputError(
            f"Image exceeds the {settings.max_upload_bytes} byte limit"
        )

    logger.info("Stored upload %s (%d bytes)", name, written)
    return f"{UPLOAD_URL_PREFIX}/{name}"


def discard_image(image_url: str | None) -> None:
    """Delete a stored upload by its public URL path; other values are ignored."""
    prefix = f"{UPLOAD_URL_PREFIX}/"
    if not image_url or not image_url.startswith(prefix):
        return
    name = Path(image_url.removeprefix(prefix)).name
    (upload_root() / name).unlink(missing_ok=True)
    logger.info("Discarded upload %s", name)
