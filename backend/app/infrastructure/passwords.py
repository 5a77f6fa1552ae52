"""Password Hashing — bcrypt salted hashes, computed off the event loop.

Invariants:
    - Plaintext passwords are never stored or logged
    - Hash/verify run in a worker thread (bcrypt is CPU-bound)
    - verify_password returns False for malformed stored hashes instead of raising
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


async def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    def _hash() -> bytes:
        return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))

    hashed = await asyncio.to_thread(_hash)
    return hashed.decode("utf-8")


async def verify_password(password: str, hashed: str) -> bool:
    def _check() -> bool:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))

    try:
        return await asyncio.to_thread(_check)
    except ValueError as e:
        logger.warning(f"Stored password hash unreadable: {e}")
        return False
