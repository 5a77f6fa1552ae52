"""Post Handlers — feed, single post, create, update, delete (5 methods).

Invariants:
    - Every method requires an authenticated identity (401 otherwise)
    - Order per mutation: auth -> validators -> load (404) -> ownership guard -> write
    - Creating/deleting a post is a single write: the owner's post list is a
      query over posts.creator_id, so there is no second document to keep in sync
    - Superseded or deleted images are released AFTER the commit through
      ImageHandlers: only files the caller uploaded and no post still references
    - Release failures are logged and never fail the request
    - Feed count and window share the same (empty) filter and newest-first order;
      posts with equal created_at are ordered by id, which is stable across pages
      but unrelated to insertion order
"""

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.credentials import require_authenticated
from app.core.domain_types import Identity
from app.core.enforce_ownership import assert_owner
from app.core.errors import AuthenticationRequiredError
from app.core.format_payloads import format_post
from app.core.paginate import FEED_PER_PAGE, page_window
from app.core.repository_protocols import ImageStore
from app.core.validate_input import validate_post_input
from app.models.post import Post
from app.models.user import User
from app.schemas.operations import PostInput
from app.services.handle_images import ImageHandlers
from app.services.lookups import get_post_or_404, parse_id

logger = logging.getLogger(__name__)

# Sent by clients that did not pick a new image on edit
_UNCHANGED_IMAGE_MARKERS = frozenset({"", "undefined"})


class PostHandlers:
    """Feed and post CRUD handlers."""

    def __init__(
        self,
        db: AsyncSession,
        identity: Identity,
        images: ImageStore,
        per_page: int = FEED_PER_PAGE,
    ):
        self.db = db
        self.identity = identity
        self.images = ImageHandlers(db, identity, images)
        self.per_page = per_page

    async def posts(self, page: int | None = None) -> dict:
        """One feed page (newest first) plus the total post count."""
        require_authenticated(self.identity)
        window = page_window(page, self.per_page)

        total = await self.db.scalar(select(func.count()).select_from(Post))
        result = await self.db.execute(
            select(Post)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(window.offset)
            .limit(window.limit),
        )
        return {
            "posts": [format_post(p) for p in result.scalars().all()],
            "total_items": total or 0,
        }

    async def post(self, post_id: str) -> dict:
        require_authenticated(self.identity)
        post = await get_post_or_404(self.db, post_id)
        return format_post(post)

    async def create_post(self, post_input: PostInput) -> dict:
        """Create a post owned by the acting user."""
        user_id = require_authenticated(self.identity)
        validate_post_input(
            post_input.title, post_input.content, post_input.image_url,
        )

        user = await self.db.get(User, parse_id(user_id, "User"))
        if not user:
            raise AuthenticationRequiredError("Invalid user.")

        post = Post(
            title=post_input.title,
            content=post_input.content,
            image_url=post_input.image_url or "",
            creator=user,
        )
        self.db.add(post)
        await self.db.commit()
        logger.info(
            "Post created",
            extra={"user_id": user_id, "post_id": str(post.id)},
        )
        return format_post(post)

    async def update_post(self, post_id: str, post_input: PostInput) -> dict:
        """Update title/content and optionally replace the image."""
        user_id = require_authenticated(self.identity)
        validate_post_input(
            post_input.title, post_input.content, post_input.image_url,
        )

        post = await get_post_or_404(self.db, post_id)
        assert_owner(post.creator, user_id)

        superseded = None
        new_image = post_input.image_url
        if new_image is not None and new_image not in _UNCHANGED_IMAGE_MARKERS:
            if new_image != post.image_url:
                superseded = post.image_url
            post.image_url = new_image
        post.title = post_input.title
        post.content = post_input.content
        await self.db.commit()

        if superseded:
            await self.images.release(superseded)
        return format_post(post)

    async def delete_post(self, post_id: str) -> bool:
        """Delete an owned post and release its image."""
        user_id = require_authenticated(self.identity)
        post = await get_post_or_404(self.db, post_id)
        assert_owner(post.creator_id, user_id)

        image_path = post.image_url
        await self.db.delete(post)
        await self.db.commit()
        logger.info(
            "Post deleted", extra={"user_id": user_id, "post_id": post_id},
        )

        await self.images.release(image_path)
        return True
