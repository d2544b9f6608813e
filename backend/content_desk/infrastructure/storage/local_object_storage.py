"""Local filesystem storage for article images.

Storage layout:
    <upload_dir>/images/<stem>_<YYYYMMDD_HHmmss>_<token>.<ext>

Blobs are served under ``<public_url>/images/...``; the key of a blob is its
path relative to ``upload_dir``.
"""

import logging
import re
import uuid
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

from content_desk.application.interfaces import ObjectStorage

logger = logging.getLogger(__name__)

IMAGES_DIR = "images"


def _datetime_stamp() -> str:
    """Return a UTC datetime stamp suitable for filenames: YYYYMMDD_HHmmss."""
    return datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")


def _sanitise(name: str, max_len: int = 80) -> str:
    """Replace non-word characters with underscores and truncate."""
    return re.sub(r"[^\w\-]", "_", name)[:max_len].strip("_") or "unnamed"


class LocalObjectStorage(ObjectStorage):
    """Infrastructure adapter for the ObjectStorage port on the local disk."""

    def __init__(self, upload_dir: str, public_url: str):
        self._upload_dir = Path(upload_dir)
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        self._public_url = public_url.rstrip("/")

    async def store(self, content: bytes, filename: str) -> str:
        """Write ``content`` under ``images/`` and return its public URL.

        A datetime stamp and a short random token keep names unique even for
        uploads of the same file in the same second.
        """
        images_dir = self._upload_dir / IMAGES_DIR
        images_dir.mkdir(parents=True, exist_ok=True)

        stem = Path(filename).stem
        suffix = Path(filename).suffix
        stored_name = f"{_sanitise(stem)}_{_datetime_stamp()}_{uuid.uuid4().hex[:8]}{suffix}"

        dest_path = images_dir / stored_name
        dest_path.write_bytes(content)
        logger.info("Stored image: %s (%d bytes)", dest_path, len(content))

        return f"{self._public_url}/{IMAGES_DIR}/{stored_name}"

    async def delete(self, url: str) -> bool:
        """Delete the blob behind ``url``. Returns False if it was not found."""
        key = self.key_from_url(url)
        if key is None:
            return False
        file_path = self._upload_dir / key
        if not file_path.exists():
            return False

        file_path.unlink(missing_ok=True)
        logger.info("Deleted image from disk: %s", file_path)
        return True

    def key_from_url(self, url: str) -> str | None:
        prefix = f"{self._public_url}/"
        if not url or not url.startswith(prefix):
            return None
        key = PurePosixPath(url[len(prefix):])
        if not key.parts or ".." in key.parts or key.is_absolute():
            return None
        return str(key)
