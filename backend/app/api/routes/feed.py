"""Feed Routes — REST post endpoints over PostHandlers, with multipart image upload.

Invariants:
    - Same handlers (and therefore same auth/validation/ownership rules) as the
      operations endpoint
    - Create requires an allowed image file → 422 "No image provided." otherwise
    - Update takes a new image file or the existing `image_url` path → 422
      "No file picked." when neither is usable
    - Field validation runs before any file is written; a file stored for a
      request whose handler then fails (domain or database error) is discarded
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from app.api.dependencies import get_post_handlers
from app.core.credentials import require_authenticated
from app.core.errors import InputValidationError
from app.core.validate_input import validate_post_input
from app.schemas.operations import PostInput
from app.services.handle_images import ImageHandlers
from app.services.handle_posts import PostHandlers

router = APIRouter(prefix="/api/v1/feed", tags=["feed"])


@router.get("/posts")
async def list_posts(
    page: int | None = Query(None),
    handlers: PostHandlers = Depends(get_post_handlers),
):
    result = await handlers.posts(page)
    return {"message": "Fetched posts.", **result}


@router.get("/posts/{post_id}")
async def get_post(
    post_id: str, handlers: PostHandlers = Depends(get_post_handlers),
):
    return {"message": "Post fetched.", "post": await handlers.post(post_id)}


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    title: str = Form(""),
    content: str = Form(""),
    image: UploadFile | None = File(None),
    handlers: PostHandlers = Depends(get_post_handlers),
):
    require_authenticated(handlers.identity)
    validate_post_input(title, content)
    uploaded = await _store_upload(image, handlers.images)
    if not uploaded:
        raise InputValidationError("No image provided.")

    try:
        post = await handlers.create_post(
            PostInput(title=title, content=content, image_url=uploaded),
        )
    except Exception:
        await handlers.images.discard(uploaded)
        raise
    return {"message": "Post created successfully.", "post": post}


@router.put("/posts/{post_id}")
async def update_post(
    post_id: str,
    title: str = Form(""),
    content: str = Form(""),
    image_url: str | None = Form(None),
    image: UploadFile | None = File(None),
    handlers: PostHandlers = Depends(get_post_handlers),
):
    require_authenticated(handlers.identity)
    validate_post_input(title, content, image_url)
    uploaded = await _store_upload(image, handlers.images)
    if not (uploaded or image_url):
        raise InputValidationError("No file picked.")

    try:
        post = await handlers.update_post(
            post_id,
            PostInput(title=title, content=content, image_url=uploaded or image_url),
        )
    except Exception:
        if uploaded:
            await handlers.images.discard(uploaded)
        raise
    return {"message": "Post updated.", "post": post}


@router.delete("/posts/{post_id}")
async def delete_post(
    post_id: str, handlers: PostHandlers = Depends(get_post_handlers),
):
    await handlers.delete_post(post_id)
    return {"message": "Deleted post."}


async def _store_upload(
    image: UploadFile | None, images: ImageHandlers,
) -> str | None:
    if image is None:
        return None
    return await images.store_upload(
        image.filename or "upload", image.content_type, await image.read(),
    )
