"""StoredImage ORM — who uploaded each file in the image store.

Invariants:
    - path is the image store path ("images/<name>"), one row per stored file
    - owner_id is the uploading user; only the owner's actions release the file
    - Row removed together with the file
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.validate_input import MAX_IMAGE_PATH_LENGTH
from app.db.base import Base


class StoredImage(Base):
    """Uploaded image file and its owner."""
    __tablename__ = "stored_images"

    path: Mapped[str] = mapped_column(
        String(MAX_IMAGE_PATH_LENGTH), primary_key=True,
    )
    owner_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
