"""ORM Models — SQLAlchemy declarative models for users, posts and stored images.

Invariants:
    - All models inherit from Base (db/base.py)
    - A user's posts are a query over posts.creator_id, never a stored list

Design Decisions:
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.post import Post  # noqa: F401
from app.models.stored_image import StoredImage  # noqa: F401
