"""Local-disk storage for fabric, project and pattern images."""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import TYPE_CHECKING

from app.core.errors import InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

IMAGE_KINDS = ("fabric", "project", "pattern")
# Stored extension is chosen by media type, never by the client file name.
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
ALLOWED_IMAGE_TYPES = frozenset(IMAGE_EXTENSIONS)
# Public URL prefix; app.main mounts UPLOAD_DIR here.
UPLOADS_URL_PATH = "/uploads"


def image_dir(kind: str, settings: "Settings") -> Path:
    """Directory for one kind of image, e.g. uploads/fabrics (created on demand)."""
    if kind not in IMAGE_KINDS:
        raise InvalidInputError("Invalid file type")
    path = Path(settings.UPLOAD_DIR) / f"{kind}s"
    path.mkdir(parents=True, exist_ok=True)
    return path


def check_image(content_type: str | None, size: int, settings: "Settings") -> str:
    """Reject anything but JPEG/PNG/WebP, and files over MAX_UPLOAD_BYTES. Returns the media type."""
    media_type = (content_type or "").split(";")[0].strip().lower()
    if media_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidInputError(
            "Invalid file type. Only JPEG, PNG, and WebP images are allowed."
        )
    if size == 0:
        raise InvalidInputError("No file uploaded")
    if size > settings.MAX_UPLOAD_BYTES:
        raise InvalidInputError(
            f"File too large. Maximum size is {settings.MAX_UPLOAD_BYTES // (1024 * 1024)} MB."
        )
    return media_type


def store_image(
    kind: str, media_type: str, content: bytes, settings: "Settings"
) -> str:
    """Write the image under a fresh uuid name with its media type's extension; return the name."""
    filename = f"{uuid.uuid4()}{IMAGE_EXTENSIONS[media_type]}"
    target = image_dir(kind, settings) / filename
    target.write_bytes(content)
    logger.info("Image stored: kind=%s filename=%s size=%s", kind, filename, len(content))
    return filename


def public_url(base_url: str, kind: str, filename: str) -> str:
    return f"{base_url.rstrip('/')}{UPLOADS_URL_PATH}/{kind}s/{filename}"


def delete_image(kind: str, filename: str, settings: "Settings") -> None:
    """Remove a stored image. Only plain file names inside the kind's directory are accepted."""
    if Path(filename).name != filename or filename in ("", ".", ".."):
        raise InvalidInputError("Invalid filename")
    path = image_dir(kind, settings) / filename
    if not path.is_file():
        raise NotFoundError("File not found")
    path.unlink()
    logger.info("Image deleted: kind=%s filename=%s", kind, filename)
