"""Request Dependencies — identity context, image store, handlers and operation dispatch.

Invariants:
    - get_identity runs the Credential Verifier on every request that declares it;
      it never rejects the request (handlers decide whether anonymity is allowed)
    - Signing secret comes from Settings, passed explicitly to the verifier
    - One LocalImageStore per process, rooted at settings.images_dir
"""

from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.core.credentials import verify_authorization
from app.core.domain_types import Identity
from app.core.repository_protocols import ImageStore
from app.infrastructure.database import get_db
from app.infrastructure.image_store import LocalImageStore
from app.services.handle_auth import AuthHandlers
from app.services.handle_images import ImageHandlers
from app.services.handle_posts import PostHandlers
from app.services.operation_dispatch import OperationDispatch


def get_identity(
    authorization: str | None = Header(None),
    settings: Settings = Depends(get_settings),
) -> Identity:
    return verify_authorization(
        authorization,
        settings.jwt_secret,
        datetime.now(timezone.utc),
        algorithm=settings.jwt_algorithm,
    )


@lru_cache
def get_image_store() -> ImageStore:
    return LocalImageStore(get_settings().images_dir)


def get_auth_handlers(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
    settings: Settings = Depends(get_settings),
) -> AuthHandlers:
    return AuthHandlers(db, identity, settings)


def get_image_handlers(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
    images: ImageStore = Depends(get_image_store),
) -> ImageHandlers:
    return ImageHandlers(db, identity, images)


def get_post_handlers(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
    images: ImageStore = Depends(get_image_store),
) -> PostHandlers:
    return PostHandlers(db, identity, images)


def get_dispatch(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_identity),
    settings: Settings = Depends(get_settings),
    images: ImageStore = Depends(get_image_store),
) -> OperationDispatch:
    return OperationDispatch(db, identity, settings, images)
