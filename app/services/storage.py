"""Backend storage service: image uploads to local buckets with public URLs."""

import logging
import uuid
from pathlib import Path
from typing import Optional, Set, Tuple

from fastapi import HTTPException, UploadFile, status

from app.config import settings

logger = logging.getLogger(__name__)

IMAGES_BUCKET = "images"

# Magic bytes signatures per image type
MAGIC_BYTES = {
    "jpeg": [b"\xff\xd8\xff"],
    "png": [b"\x89PNG\r\n\x1a\n"],
    "gif": [b"GIF87a", b"GIF89a"],
}

EXTENSION_TO_TYPE = {
    ".jpg": "jpeg",
    ".jpeg": "jpeg",
    ".png": "png",
    ".gif": "gif",
    ".webp": "webp",
}

CONTENT_TYPE_TO_EXTENSION = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

ALLOWED_IMAGE_EXTENSIONS: Set[str] = set(EXTENSION_TO_TYPE)


class StorageError(Exception):
    """Raised when a bucket path is unsafe or the file cannot be written."""


def validate_magic_bytes(file_content: bytes, expected_type: str) -> bool:
    """Check the file signature against the type implied by its extension."""
    if expected_type == "webp":
        # RIFF....WEBP
        return len(file_content) >= 12 and file_content[:4] == b"RIFF" and file_content[8:12] == b"WEBP"
    return any(file_content.startswith(signature) for signature in MAGIC_BYTES.get(expected_type, ()))


def get_file_extension(filename: Optional[str]) -> str:
    if not filename:
        return ""
    return Path(filename).suffix.lower()


def validate_image(upload_file: UploadFile, max_size_bytes: Optional[int] = None) -> Tuple[bytes, str]:
    """
    Validate an uploaded image.

    Returns:
        Tuple of (file_content, file_extension)

    Raises:
        HTTPException: 400 for a bad type or content, 413 when too large
    """
    if not upload_file or not upload_file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    file_ext = get_file_extension(upload_file.filename)
    if file_ext not in ALLOWED_IMAGE_EXTENSIONS:
        file_ext = CONTENT_TYPE_TO_EXTENSION.get(upload_file.content_type or "", "")
    if file_ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Please upload JPEG, PNG, GIF, or WebP.",
        )

    upload_file.file.seek(0)
    file_content = upload_file.file.read()
    upload_file.file.seek(0)

    max_size = max_size_bytes or settings.MAX_IMAGE_SIZE_MB * 1024 * 1024
    if len(file_content) > max_size:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size is {max_size / (1024 * 1024):.0f}MB.",
        )
    if not file_content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty files are not allowed")

    if not validate_magic_bytes(file_content, EXTENSION_TO_TYPE[file_ext]):
        logger.warning(f"[UPLOAD] Magic bytes mismatch for {upload_file.filename} ({file_ext})")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File content does not match its type.",
        )

    return file_content, file_ext


def random_image_name(file_ext: str) -> str:
    return f"{uuid.uuid4().hex}{file_ext}"


class StorageService:
    """Buckets are directories under ``UPLOAD_DIR`` served at ``STORAGE_PUBLIC_URL``."""

    def __init__(self, root: Optional[str] = None, public_url: Optional[str] = None):
        self.root = Path(root or settings.UPLOAD_DIR)
        self.public_url = (public_url or settings.STORAGE_PUBLIC_URL).rstrip("/")

    def _resolve(self, bucket: str, path: str) -> Path:
        bucket_dir = (self.root / bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir != target.parent and bucket_dir not in target.parents:
            logger.warning(f"[UPLOAD] Path traversal blocked: {bucket}/{path}")
            raise StorageError(f"Unsafe storage path: {path}")
        return target

    def upload(self, bucket: str, path: str, content: bytes) -> str:
        """Write ``content`` to ``bucket/path``; returns the stored path."""
        target = self._resolve(bucket, path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"[UPLOAD] Failed to save {bucket}/{path}: {e}")
            raise StorageError("Failed to store file") from e

        logger.info(f"[UPLOAD] Stored {bucket}/{path} ({len(content)} bytes)")
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_url}/{bucket}/{path.lstrip('/')}"
