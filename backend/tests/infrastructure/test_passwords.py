"""Password Hashing — bcrypt hash/verify off the event loop."""

from app.infrastructure.passwords import hash_password, verify_password


async def test_hash_then_verify():
    hashed = await hash_password("secret-pw", rounds=4)
    assert hashed != "secret-pw"
    assert await verify_password("secret-pw", hashed)


async def test_wrong_password_fails():
    hashed = await hash_password("secret-pw", rounds=4)
    assert not await verify_password("other-pw", hashed)


async def test_malformed_hash_fails_without_raising():
    assert not await verify_password("secret-pw", "not-a-bcrypt-hash")
