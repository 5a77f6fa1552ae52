"""Post Image Upload — PUT /api/v1/post-image.

Invariants:
    - Anonymous callers get 401
    - Allowed image → 201 with the stored path; old path released afterwards
      only when the caller uploaded it and no post references it
    - Missing or disallowed file → 200 "No file provided."
"""

URL = "/api/v1/post-image"


def _stored(image_store, path: str) -> bool:
    return (image_store.root / path.split("/", 1)[1]).exists()


async def test_upload_requires_token(client):
    res = await client.put(URL, files={"image": ("a.png", b"x", "image/png")})
    assert res.status_code == 401


async def test_upload_stores_image(client, alice, headers_for, image_store):
    res = await client.put(
        URL,
        files={"image": ("cat.png", b"\x89PNG", "image/png")},
        headers=headers_for(alice),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "File stored."
    assert body["file_path"].startswith("images/")
    assert body["file_path"].endswith("-cat.png")
    assert await image_store.release(body["file_path"]) is True


async def test_upload_releases_old_path(client, alice, headers_for, upload_as, image_store):
    old = await upload_as(alice, "old.png")
    res = await client.put(
        URL,
        files={"image": ("new.jpg", b"new", "image/jpeg")},
        data={"oldPath": old},
        headers=headers_for(alice),
    )
    assert res.status_code == 201
    assert not _stored(image_store, old)


async def test_upload_without_file(client, alice, headers_for):
    res = await client.put(URL, data={"oldPath": ""}, headers=headers_for(alice))
    assert res.status_code == 200
    assert res.json() == {"message": "No file provided."}


async def test_upload_disallowed_type_is_dropped(client, alice, headers_for, tmp_path):
    res = await client.put(
        URL,
        files={"image": ("doc.pdf", b"%PDF", "application/pdf")},
        headers=headers_for(alice),
    )
    assert res.status_code == 200
    assert res.json() == {"message": "No file provided."}
    assert not (tmp_path / "images").exists()


async def test_upload_keeps_old_path_of_another_user(
    client, alice, bob, headers_for, upload_as, image_store,
):
    bob_path = await upload_as(bob, "bob.png")
    res = await client.put(
        URL,
        files={"image": ("mine.png", b"mine", "image/png")},
        data={"oldPath": bob_path},
        headers=headers_for(alice),
    )
    assert res.status_code == 201
    assert _stored(image_store, bob_path)


async def test_upload_keeps_old_path_still_on_a_post(
    client, alice, headers_for, upload_as, image_store,
):
    headers = headers_for(alice)
    old = await upload_as(alice, "old.png")
    await client.post("/api/v1/operations", json={
        "operation": "createPost",
        "variables": {"post_input": {
            "title": "Picture post", "content": "Look at this", "image_url": old,
        }},
    }, headers=headers)

    res = await client.put(
        URL,
        files={"image": ("new.png", b"new", "image/png")},
        data={"oldPath": old},
        headers=headers,
    )
    assert res.status_code == 201
    assert _stored(image_store, old)
