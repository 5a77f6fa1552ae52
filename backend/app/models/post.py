"""Post ORM — a titled text post with one attached image.

Invariants:
    - Always belongs to a User (creator_id FK), assigned once at creation
    - title and content are non-nullable (length rules enforced in core/validate_input)
    - image_url is the image store path, released when the post is deleted
    - Feed order is created_at DESC (indexed)

Design Decisions:
    - creator loaded eagerly (selectin): every payload carries the expanded creator
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.validate_input import MAX_IMAGE_PATH_LENGTH, MAX_TITLE_LENGTH
from app.db.base import Base


class Post(Base):
    """Feed post authored by a user."""
    __tablename__ = "posts"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(MAX_IMAGE_PATH_LENGTH), nullable=False)
    creator_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    creator: Mapped["User"] = relationship("User", lazy="selectin")
