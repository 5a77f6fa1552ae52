"""User ORM — an account that can author posts.

Invariants:
    - id is UUID primary key (client-side default)
    - email is unique across the system
    - password holds a bcrypt hash, never plaintext
    - status defaults to "I am new!"
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from app.core.validate_input import (
    MAX_EMAIL_LENGTH, MAX_NAME_LENGTH, MAX_STATUS_LENGTH,
)
from app.db.base import Base

DEFAULT_STATUS = "I am new!"


class User(Base):
    """User account."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(MAX_EMAIL_LENGTH), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(MAX_NAME_LENGTH), nullable=False)
    password: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(MAX_STATUS_LENGTH), nullable=False, default=DEFAULT_STATUS,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
