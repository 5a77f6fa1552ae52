"""Auth Handlers — signup, login, current user and status (5 methods).

Invariants:
    - create_user and login are the only handlers that accept anonymous callers
    - Validation runs before any query; duplicate email raises ConflictError (409)
    - Passwords stored as bcrypt hashes; payloads never include them
    - Tokens signed with the process-wide secret, expiring token_ttl_seconds after issue
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.core.credentials import issue_token, require_authenticated
from app.core.domain_types import Identity
from app.core.errors import (
    AuthenticationRequiredError, ConflictError, ResourceNotFoundError,
)
from app.core.format_payloads import format_user
from app.core.validate_input import validate_status, validate_user_input
from app.infrastructure.passwords import hash_password, verify_password
from app.models.user import User
from app.schemas.operations import UserInput
from app.services.lookups import get_user_or_404, list_post_ids

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AuthHandlers:
    """Account and session handlers."""

    def __init__(
        self,
        db: AsyncSession,
        identity: Identity,
        settings: Settings,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.db = db
        self.identity = identity
        self.settings = settings
        self.clock = clock

    async def create_user(self, user_input: UserInput) -> dict:
        """Sign up a new user. Returns the user payload."""
        validate_user_input(user_input.email, user_input.name, user_input.password)

        existing = await self._find_by_email(user_input.email)
        if existing:
            raise ConflictError("User with this email already exists.")

        hashed = await hash_password(
            user_input.password, rounds=self.settings.password_hash_rounds,
        )
        user = User(
            email=user_input.email, name=user_input.name, password=hashed,
        )
        self.db.add(user)
        await self.db.commit()
        logger.info("User created", extra={"user_id": str(user.id)})
        return format_user(user, [])

    async def login(self, email: str, password: str) -> dict:
        """Check credentials and issue a token."""
        user = await self._find_by_email(email)
        if not user:
            raise ResourceNotFoundError("User", email)
        if not await verify_password(password, user.password):
            raise AuthenticationRequiredError("Wrong password.")

        token = issue_token(
            str(user.id),
            user.email,
            self.settings.jwt_secret,
            self.clock(),
            ttl=timedelta(seconds=self.settings.token_ttl_seconds),
            algorithm=self.settings.jwt_algorithm,
        )
        return {"token": token, "user_id": str(user.id)}

    async def user(self) -> dict:
        """Current user's profile, including the ids of their posts."""
        user_id = require_authenticated(self.identity)
        user = await get_user_or_404(self.db, user_id)
        return format_user(user, await list_post_ids(self.db, user.id))

    async def user_status(self) -> dict:
        user_id = require_authenticated(self.identity)
        user = await get_user_or_404(self.db, user_id)
        return {"status": user.status}

    async def update_status(self, status: str) -> dict:
        user_id = require_authenticated(self.identity)
        validate_status(status)
        user = await get_user_or_404(self.db, user_id)
        user.status = status
        await self.db.commit()
        return format_user(user, await list_post_ids(self.db, user.id))

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
