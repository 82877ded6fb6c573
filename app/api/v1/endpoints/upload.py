"""Upload endpoints for article images."""

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.api.deps import get_current_user, get_storage_service
from app.schemas.auth import SessionUser
from app.services.storage import (
    IMAGES_BUCKET,
    StorageError,
    StorageService,
    random_image_name,
    validate_image,
)

router = APIRouter(
    prefix="/admin/uploads",
    tags=["Admin - Upload"],
)


@router.post("/images", status_code=status.HTTP_201_CREATED, summary="Upload featured image")
async def upload_image(
    file: UploadFile = File(...),
    storage: StorageService = Depends(get_storage_service),
    current_user: SessionUser = Depends(get_current_user),
) -> dict:
    """
    Upload an image for a post.

    - **file**: JPEG, PNG, GIF or WebP (max 5MB)

    Returns the stored path and its public URL.
    """
    content, file_ext = validate_image(file)
    path = random_image_name(file_ext)

    try:
        storage.upload(IMAGES_BUCKET, path, content)
    except StorageError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Upload failed. Please try again.",
        ) from e

    return {
        "success": True,
        "bucket": IMAGES_BUCKET,
        "path": path,
        "url": storage.get_public_url(IMAGES_BUCKET, path),
    }
