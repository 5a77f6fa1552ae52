"""Payload Formatting — shapes users and posts into JSON-ready response dicts.

Invariants:
    - Identifiers serialized as strings
    - Timestamps serialized as ISO-8601 in UTC (naive values are treated as UTC)
    - User payloads never include the password hash
    - Post creator is a CreatorRef: expanded (with name) when the creator is loaded

Design Decisions:
    - Structural Protocols (repository_protocols) over ORM imports: core stays IO-free
"""

from datetime import datetime, timezone

from app.core.domain_types import CreatorRef
from app.core.enforce_ownership import creator_id_of
from app.core.repository_protocols import PostLike, UserLike


def format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def creator_ref(post: PostLike) -> CreatorRef:
    """Expanded reference when post.creator is loaded, bare id otherwise."""
    creator = post.creator
    if creator is not None:
        return CreatorRef(id=creator_id_of(creator), name=creator.name)
    return CreatorRef(id=creator_id_of(post.creator_id))


def format_post(post: PostLike) -> dict:
    ref = creator_ref(post)
    creator = {"id": ref.id}
    if ref.is_expanded:
        creator["name"] = ref.name
    return {
        "id": str(post.id),
        "title": post.title,
        "content": post.content,
        "image_url": post.image_url,
        "creator": creator,
        "created_at": format_timestamp(post.created_at),
        "updated_at": format_timestamp(post.updated_at),
    }


def format_user(user: UserLike, post_ids: list | None = None) -> dict:
    """User payload. post_ids is the query-time view of the user's posts."""
    return {
        "id": str(user.id),
        "email": user.email,
        "name": user.name,
        "status": user.status,
        "posts": [str(pid) for pid in (post_ids or [])],
        "created_at": format_timestamp(user.created_at),
    }
