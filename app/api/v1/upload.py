"""Image upload endpoints: store fabric/project/pattern images on local disk."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Request, UploadFile
from starlette.concurrency import run_in_threadpool

from app.api.v1.auth import get_current_user
from app.core.config import Settings, get_settings
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.upload import DeleteFileRequest, ImageKind, UploadResponse
from app.services import images

router = APIRouter()

READ_CHUNK_BYTES = 1024 * 1024


async def _read_capped(file: UploadFile, limit: int) -> bytes:
    """Read at most limit + 1 bytes so oversized uploads are detected without buffering them whole."""
    chunks: list[bytes] = []
    total = 0
    while total <= limit:
        chunk = await file.read(READ_CHUNK_BYTES)
        if not chunk:
            break
        chunks.append(chunk)
        total += len(chunk)
    return b"".join(chunks)


@router.post("/{kind}", response_model=UploadResponse)
async def upload_image(
    kind: ImageKind,
    request: Request,
    image: Annotated[UploadFile, File(description="JPEG, PNG or WebP image")],
    _user: Annotated[User, Depends(get_current_user)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadResponse:
    """
    Accept one image as multipart/form-data field `image`.

    The file is stored under UPLOAD_DIR/<kind>s/ with a random name and served
    from /uploads/<kind>s/<filename>.
    """
    content = await _read_capped(image, settings.MAX_UPLOAD_BYTES)
    media_type = images.check_image(image.content_type, len(content), settings)
    original_name = image.filename or ""
    filename = await run_in_threadpool(
        images.store_image, kind, media_type, content, settings
    )
    return UploadResponse(
        filename=filename,
        original_name=original_name,
        size=len(content),
        url=images.public_url(str(request.base_url), kind, filename),
    )


@router.delete("/file", response_model=MessageResponse)
def delete_image(
    body: DeleteFileRequest,
    _user: Annotated[User, Depends(get_current_user)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> MessageResponse:
    """Remove a previously uploaded image. 404 if it does not exist."""
    images.delete_image(body.type, body.filename, settings)
    return MessageResponse(message="File deleted successfully")
