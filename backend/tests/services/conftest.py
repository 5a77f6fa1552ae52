"""Service test fixtures — async DB, image store and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_image_store overridden with a LocalImageStore under tmp_path
    - db_manager patched so the readiness probe sees the test engine
    - upload_as stores images through the upload route, so they are owned

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Users seeded through the model with a real bcrypt hash (rounds=4)
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_image_store
from app.config import get_settings
from app.core.credentials import issue_token
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.infrastructure.image_store import LocalImageStore
from app.infrastructure.passwords import hash_password
from app.models.post import Post
from app.models.user import User
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def image_store(tmp_path):
    return LocalImageStore(tmp_path / "images")


@pytest.fixture
async def client(test_engine, test_session_factory, image_store):
    """FastAPI test client with DB and image store dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_store] = lambda: image_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


# ─── Seed helpers ───────────────────────────────────────────────

async def _seed_user(db, email: str, name: str, password: str = "secret-pw") -> User:
    user = User(
        email=email, name=name,
        password=await hash_password(password, rounds=4),
    )
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
def headers_for():
    """Build an Authorization header carrying a fresh token for a user."""
    def _headers(user: User) -> dict:
        settings = get_settings()
        token = issue_token(
            str(user.id), user.email, settings.jwt_secret,
            datetime.now(timezone.utc),
        )
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
async def alice(test_db):
    return await _seed_user(test_db, "alice@example.com", "Alice")


@pytest.fixture
async def bob(test_db):
    return await _seed_user(test_db, "bob@example.com", "Bob")


@pytest.fixture
async def seed_posts(test_db, alice):
    """Five posts by alice with strictly increasing created_at."""
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    posts = []
    for i in range(1, 6):
        post = Post(
            title=f"Post number {i}",
            content=f"Content of post {i}",
            image_url=f"images/seed-{i}.png",
            creator_id=alice.id,
            created_at=base + timedelta(minutes=i),
            updated_at=base + timedelta(minutes=i),
        )
        test_db.add(post)
        posts.append(post)
    await test_db.commit()
    return posts


@pytest.fixture
def upload_as(client, headers_for):
    """Upload a PNG through PUT /post-image as user; returns the stored path."""
    async def _upload(user: User, filename: str = "pic.png") -> str:
        res = await client.put(
            "/api/v1/post-image",
            files={"image": (filename, b"\x89PNG", "image/png")},
            headers=headers_for(user),
        )
        assert res.status_code == 201
        return res.json()["file_path"]
    return _upload
