"""Post Image Upload — stores one image file and optionally releases the old one.

Invariants:
    - Anonymous callers get 401 before the file is read
    - Missing file, or a file whose content type is not allowed, → 200
      "No file provided." (disallowed uploads are dropped silently)
    - oldPath is released only after the new file is stored, and only when the
      caller uploaded it and no post still references it
    - Success → 201 {"message": "File stored.", "file_path": <path>}
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from fastapi.responses import JSONResponse

from app.api.dependencies import get_image_handlers
from app.core.credentials import require_authenticated
from app.services.handle_images import ImageHandlers

router = APIRouter(prefix="/api/v1", tags=["images"])


@router.put("/post-image")
async def upload_post_image(
    image: UploadFile | None = File(None),
    old_path: str | None = Form(None, alias="oldPath"),
    images: ImageHandlers = Depends(get_image_handlers),
):
    """Store an uploaded post image."""
    require_authenticated(images.identity)
    stored = None
    if image is not None:
        stored = await images.store_upload(
            image.filename or "upload", image.content_type, await image.read(),
        )
    if stored is None:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content={"message": "No file provided."},
        )

    await images.release(old_path)
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"message": "File stored.", "file_path": stored},
    )
