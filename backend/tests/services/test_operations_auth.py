"""Operations Endpoint (accounts) — createUser, login, user, userStatus, updateStatus.

Invariants:
    - createUser and login accept anonymous callers; the rest require a token
    - Validation failures → 422 with every violated rule in error.data
    - Unknown operation names and malformed variables → 422
"""

from datetime import datetime, timezone
from uuid import uuid4

from app.config import get_settings
from app.core.credentials import issue_token, verify_authorization

URL = "/api/v1/operations"


async def _op(client, operation, variables=None, headers=None):
    return await client.post(
        URL,
        json={"operation": operation, "variables": variables or {}},
        headers=headers or {},
    )


# ─── createUser ─────────────────────────────────────────────────

async def test_create_user_returns_payload_without_password(client):
    res = await _op(client, "createUser", {
        "user_input": {"email": "a@b.com", "name": "A", "password": "12345"},
    })
    assert res.status_code == 200
    user = res.json()["data"]
    assert user["email"] == "a@b.com"
    assert user["name"] == "A"
    assert user["status"] == "I am new!"
    assert user["posts"] == []
    assert "password" not in user


async def test_create_user_reports_every_violation(client):
    res = await _op(client, "createUser", {
        "user_input": {"email": "nope", "name": "", "password": "1"},
    })
    assert res.status_code == 422
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert [d["message"] for d in error["data"]] == [
        "Email is invalid.", "Password is too short.", "Name is invalid.",
    ]


async def test_create_user_duplicate_email_conflicts(client, alice):
    res = await _op(client, "createUser", {
        "user_input": {"email": alice.email, "name": "Again", "password": "12345"},
    })
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_create_user_missing_variables_is_422(client):
    res = await _op(client, "createUser", {})
    assert res.status_code == 422
    messages = [d["message"] for d in res.json()["error"]["data"]]
    assert len(messages) == 1
    assert messages[0].startswith("user_input:")


# ─── login ──────────────────────────────────────────────────────

async def test_login_issues_verifiable_token(client, alice):
    res = await _op(client, "login", {
        "email": alice.email, "password": "secret-pw",
    })
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["user_id"] == str(alice.id)

    identity = verify_authorization(
        f"Bearer {data['token']}", get_settings().jwt_secret,
        datetime.now(timezone.utc),
    )
    assert identity.user_id == str(alice.id)


async def test_login_unknown_email_is_404(client):
    res = await _op(client, "login", {
        "email": "ghost@example.com", "password": "secret-pw",
    })
    assert res.status_code == 404


async def test_login_wrong_password_is_401(client, alice):
    res = await _op(client, "login", {
        "email": alice.email, "password": "wrong-pw",
    })
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Wrong password."


# ─── user / userStatus / updateStatus ───────────────────────────

async def test_user_requires_token(client):
    res = await _op(client, "user")
    assert res.status_code == 401
    assert res.json()["error"]["code"] == "NOT_AUTHENTICATED"


async def test_user_lists_own_post_ids(client, alice, seed_posts, headers_for):
    res = await _op(client, "user", headers=headers_for(alice))
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == str(alice.id)
    assert data["posts"] == [str(p.id) for p in seed_posts]


async def test_user_for_unknown_account_is_404(client):
    token = issue_token(
        str(uuid4()), "gone@example.com", get_settings().jwt_secret,
        datetime.now(timezone.utc),
    )
    res = await _op(client, "user", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 404


async def test_user_status_defaults(client, alice, headers_for):
    res = await _op(client, "userStatus", headers=headers_for(alice))
    assert res.json()["data"] == {"status": "I am new!"}


async def test_update_status_roundtrip(client, alice, headers_for):
    headers = headers_for(alice)
    res = await _op(client, "updateStatus", {"status": "Busy coding"}, headers)
    assert res.status_code == 200
    assert res.json()["data"]["status"] == "Busy coding"

    res = await _op(client, "userStatus", headers=headers)
    assert res.json()["data"] == {"status": "Busy coding"}


async def test_update_status_too_short_is_422(client, alice, headers_for):
    res = await _op(client, "updateStatus", {"status": "ok"}, headers_for(alice))
    assert res.status_code == 422


async def test_update_status_over_column_width_is_422(client, alice, headers_for):
    res = await _op(client, "updateStatus", {"status": "s" * 501}, headers_for(alice))
    assert res.status_code == 422
    assert res.json()["error"]["data"] == [{"message": "Status is too long."}]


async def test_update_status_anonymous_is_401(client):
    res = await _op(client, "updateStatus", {"status": "Busy coding"})
    assert res.status_code == 401


# ─── dispatch ───────────────────────────────────────────────────

async def test_unknown_operation_is_422(client):
    res = await _op(client, "dropTables")
    assert res.status_code == 422
    assert "dropTables" in res.json()["error"]["message"]


async def test_malformed_envelope_is_400(client):
    res = await client.post(URL, json={"variables": {}})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["data"] == [{"message": "operation: Field required"}]
