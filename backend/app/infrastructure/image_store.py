"""Image Store — local-disk store for post images.

Invariants:
    - Only image/png, image/jpg, image/jpeg are stored; anything else is dropped
      silently (save returns None, never raises)
    - Stored path = "<url_prefix>/<UTC timestamp>-<original basename>"
    - release() never raises: missing files, IO errors and paths outside the
      root are logged and reported as False
    - Paths are confined to the root directory (no traversal via "..")

Design Decisions:
    - aiofiles for file IO: keeps the event loop free during writes/deletes
    - Returned paths match the /images static mount so clients can render them
"""

import logging
from datetime import datetime, timezone
from pathlib import Path, PurePosixPath

import aiofiles
import aiofiles.os

from app.core.domain_types import ImageContentType

logger = logging.getLogger(__name__)

ALLOWED_CONTENT_TYPES = frozenset(t.value for t in ImageContentType)


class LocalImageStore:
    """Stores uploads under `root`, addressed as `<url_prefix>/<filename>`."""

    def __init__(self, root: str | Path, url_prefix: str = "images"):
        self.root = Path(root)
        self.url_prefix = url_prefix.strip("/")

    async def save(
        self, filename: str, content_type: str | None, data: bytes,
    ) -> str | None:
        """Store an allowed image and return its path, or None if filtered out."""
        if content_type not in ALLOWED_CONTENT_TYPES:
            logger.info(f"Dropped upload '{filename}' with content type {content_type}")
            return None
        basename = PurePosixPath((filename or "upload").replace("\\", "/")).name
        stamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H-%M-%S-%fZ")
        stored_name = f"{stamp}-{basename or 'upload'}"

        await aiofiles.os.makedirs(self.root, exist_ok=True)
        async with aiofiles.open(self.root / stored_name, "wb") as f:
            await f.write(data)
        return f"{self.url_prefix}/{stored_name}"

    async def release(self, path: str) -> bool:
        """Delete a stored image. Logs but never raises on failure."""
        target = self._resolve(path)
        if target is None:
            logger.warning(f"Refusing to release image outside store: {path!r}")
            return False
        try:
            await aiofiles.os.remove(target)
        except OSError as e:
            logger.warning(f"Failed to release image {path!r}: {e}")
            return False
        logger.info(f"Released image {path}")
        return True

    def _resolve(self, path: str) -> Path | None:
        if not path:
            return None
        parts = PurePosixPath(path.replace("\\", "/").lstrip("/")).parts
        if len(parts) != 2 or parts[0] != self.url_prefix:
            return None
        if parts[1] in (".", ".."):
            return None
        root = self.root.resolve()
        target = (root / parts[1]).resolve()
        if target.parent != root:
            return None
        return target
