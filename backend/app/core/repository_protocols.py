"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy these without inheritance
    - ImageStore methods are async because implementations do file IO
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID


class UserLike(Protocol):
    """Structural contract for User objects passed to formatters."""
    id: UUID
    email: str
    name: str
    status: str
    created_at: datetime


class PostLike(Protocol):
    """Structural contract for Post objects passed to formatters and the guard.

    creator is None when the owner was not loaded (only creator_id is known).
    """
    id: UUID
    title: str
    content: str
    image_url: str
    creator_id: UUID
    creator: UserLike | None
    created_at: datetime
    updated_at: datetime


class ImageStore(Protocol):
    """Contract for the external image file store — implemented by shell."""
    async def save(
        self, filename: str, content_type: str | None, data: bytes,
    ) -> str | None: ...
    async def release(self, path: str) -> bool: ...
