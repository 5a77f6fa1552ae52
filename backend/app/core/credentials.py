"""Credential Verifier — token issuance and Authorization header verification.

Invariants:
    - verify_authorization NEVER raises; every failure degrades to ANONYMOUS
    - Header must split into exactly two space-separated parts ("<scheme> <token>")
    - Expiry is checked against the caller-supplied `now`, not the wall clock
    - Tokens carry userId and email claims; lifetime defaults to one hour
    - require_authenticated is the single 401 gate used by protected handlers

Design Decisions:
    - PyJWT with exp verification disabled and re-checked against `now`:
      keeps the verifier a pure function of (header, secret, now)
    - Secret and algorithm are arguments, never read from settings here
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt

from app.core.domain_types import ANONYMOUS, Identity
from app.core.errors import AuthenticationRequiredError

logger = logging.getLogger(__name__)

TOKEN_TTL = timedelta(hours=1)
DEFAULT_ALGORITHM = "HS256"


def issue_token(
    user_id: str,
    email: str,
    secret: str,
    now: datetime,
    ttl: timedelta = TOKEN_TTL,
    algorithm: str = DEFAULT_ALGORITHM,
) -> str:
    """Sign a token for user_id that expires ttl after now."""
    now = _as_utc(now)
    payload = {
        "userId": str(user_id),
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def verify_authorization(
    raw_header: str | None,
    secret: str,
    now: datetime,
    algorithm: str = DEFAULT_ALGORITHM,
) -> Identity:
    """Derive the request identity from a raw Authorization header value."""
    if not raw_header:
        return ANONYMOUS
    parts = raw_header.split(" ")
    if len(parts) != 2 or not parts[1]:
        return ANONYMOUS

    try:
        claims = jwt.decode(
            parts[1],
            secret,
            algorithms=[algorithm],
            options={
                "verify_exp": False,
                "verify_iat": False,
                "require": ["exp", "userId"],
            },
        )
        expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
    except Exception as e:
        logger.debug(f"Token rejected: {type(e).__name__}")
        return ANONYMOUS

    if expires_at <= _as_utc(now):
        return ANONYMOUS
    user_id = claims.get("userId")
    if not isinstance(user_id, str) or not user_id:
        return ANONYMOUS
    return Identity(is_authenticated=True, user_id=user_id)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def require_authenticated(identity: Identity) -> str:
    """Return the acting user id or raise AuthenticationRequiredError (401)."""
    if not identity.is_authenticated or not identity.user_id:
        raise AuthenticationRequiredError()
    return identity.user_id
