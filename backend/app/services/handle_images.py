"""Image Handlers — store uploads on behalf of a user and release them safely.

Invariants:
    - Every stored upload is recorded as a StoredImage owned by the uploader
    - release() deletes a file only when the acting user uploaded it AND no post
      still references it; anything else is refused, logged and reported False
    - Paths never recorded (seed data, foreign or made-up paths) are never deleted
    - release() never raises: a refused or failed release never fails the request

Design Decisions:
    - Ownership lives in the database next to the posts that reference the file,
      so the reference check and the owner check read the same source of truth
    - discard() is the rollback path for a request whose own upload must go: it
      rolls the session back first so it works after a failed commit
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.credentials import require_authenticated
from app.core.domain_types import Identity
from app.core.repository_protocols import ImageStore
from app.models.post import Post
from app.models.stored_image import StoredImage

logger = logging.getLogger(__name__)


class ImageHandlers:
    """Owner-aware front for the image store."""

    def __init__(self, db: AsyncSession, identity: Identity, store: ImageStore):
        self.db = db
        self.identity = identity
        self.store = store

    async def store_upload(
        self, filename: str, content_type: str | None, data: bytes,
    ) -> str | None:
        """Store an allowed image owned by the caller. None if filtered out."""
        user_id = require_authenticated(self.identity)
        path = await self.store.save(filename, content_type, data)
        if path is None:
            return None
        self.db.add(StoredImage(path=path, owner_id=UUID(user_id)))
        await self.db.commit()
        logger.info(f"Image stored at {path}", extra={"user_id": user_id})
        return path

    async def release(self, path: str | None) -> bool:
        """Delete an image the caller uploaded that no post references any more."""
        if not path or not self.identity.user_id:
            return False
        record = await self.db.get(StoredImage, path)
        if record is None or str(record.owner_id) != self.identity.user_id:
            logger.warning(
                f"Refusing to release image not owned by caller: {path!r}",
                extra={"user_id": self.identity.user_id},
            )
            return False
        references = await self.db.scalar(
            select(func.count()).select_from(Post).where(Post.image_url == path),
        )
        if references:
            logger.info(f"Image {path} still referenced by {references} post(s)")
            return False
        return await self._remove(record)

    async def discard(self, path: str) -> bool:
        """Drop the caller's own upload after its request failed."""
        await self.db.rollback()
        record = await self.db.get(StoredImage, path)
        if record is None:
            return await self.store.release(path)
        return await self._remove(record)

    async def _remove(self, record: StoredImage) -> bool:
        path = record.path
        await self.db.delete(record)
        await self.db.commit()
        return await self.store.release(path)
