"""Payload Formatting — tests for user/post response shapes.

Tests cover:
    - Post payload carries expanded creator when loaded, bare id otherwise
    - Timestamps rendered as UTC ISO-8601 (naive values treated as UTC)
    - User payload lists post ids as strings and never includes the password
"""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

from app.core.format_payloads import format_post, format_timestamp, format_user

CREATED = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def _user(**overrides):
    fields = dict(
        id=uuid4(), email="a@b.com", name="Alice", status="I am new!",
        password="$2b$hash", created_at=CREATED,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def _post(creator, **overrides):
    fields = dict(
        id=uuid4(), title="Hello", content="World content",
        image_url="images/x.png", creator=creator,
        creator_id=creator.id if creator else uuid4(),
        created_at=CREATED, updated_at=CREATED,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_format_timestamp_naive_is_utc():
    naive = datetime(2024, 1, 2, 3, 4, 5)
    assert format_timestamp(naive) == "2024-01-02T03:04:05+00:00"
    assert format_timestamp(None) is None


def test_post_with_loaded_creator_is_expanded():
    user = _user()
    payload = format_post(_post(user))
    assert payload["creator"] == {"id": str(user.id), "name": "Alice"}
    assert payload["created_at"] == CREATED.isoformat()
    assert payload["image_url"] == "images/x.png"


def test_post_without_loaded_creator_carries_bare_id():
    post = _post(None)
    assert format_post(post)["creator"] == {"id": str(post.creator_id)}


def test_user_payload_lists_post_ids_and_hides_password():
    user = _user()
    ids = [uuid4(), uuid4()]
    payload = format_user(user, ids)
    assert payload["posts"] == [str(i) for i in ids]
    assert "password" not in payload
    assert payload["status"] == "I am new!"


def test_user_payload_defaults_to_no_posts():
    assert format_user(_user())["posts"] == []
