"""Lookups — load-or-404 helpers and query-time views shared by handlers.

Invariants:
    - Malformed ids are reported as not found (404), never as 500
    - list_post_ids is the owner's post list: derived from posts.creator_id
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ResourceNotFoundError
from app.models.post import Post
from app.models.user import User


def parse_id(value: str, resource_type: str) -> UUID:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ResourceNotFoundError(resource_type, str(value))


async def get_user_or_404(db: AsyncSession, user_id: str) -> User:
    user = await db.get(User, parse_id(user_id, "User"))
    if not user:
        raise ResourceNotFoundError("User", user_id)
    return user


async def get_post_or_404(db: AsyncSession, post_id: str) -> Post:
    post = await db.get(Post, parse_id(post_id, "Post"))
    if not post:
        raise ResourceNotFoundError("Post", post_id)
    return post


async def list_post_ids(db: AsyncSession, user_id: UUID) -> list[UUID]:
    result = await db.execute(
        select(Post.id)
        .where(Post.creator_id == user_id)
        .order_by(Post.created_at.asc()),
    )
    return list(result.scalars().all())
