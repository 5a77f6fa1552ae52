"""Domain Types — upload content types, the per-request Identity and the creator reference.

Invariants:
    - Identity is immutable once derived; ANONYMOUS is the only unauthenticated value
    - CreatorRef.name is set only when the creator was expanded (loaded)

Design Decisions:
    - One typed creator reference instead of duck-typed "raw id or object" payloads
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class ImageContentType(str, Enum):
    """Upload content types accepted by the image store."""
    PNG = "image/png"
    JPG = "image/jpg"
    JPEG = "image/jpeg"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Who is making the current request. Derived from the Authorization header."""
    is_authenticated: bool = False
    user_id: str | None = None


ANONYMOUS = Identity()


@dataclass(frozen=True)
class CreatorRef:
    """Reference to a post's owner. name is None unless expanded."""
    id: str
    name: str | None = None

    @property
    def is_expanded(self) -> bool:
        return self.name is not None
