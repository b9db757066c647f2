"""Image store for component pictures.

Files land under ``UPLOAD_DIR/<tenant folder>/`` with a random name and are
served back through the static mount at ``UPLOAD_URL_PREFIX``.
"""

import hashlib
import os
import uuid
from typing import Optional

import structlog

from stockroom.config import Settings
from stockroom.core.exceptions import PayloadTooLargeError, ValidationFailedError

logger = structlog.get_logger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
ALLOWED_EXTENSIONS = {"jpg", "jpeg", "png", "gif", "webp"}

CHUNK_SIZE = 256 * 1024


def _too_large(settings: Settings, size: int) -> PayloadTooLargeError:
    return PayloadTooLargeError(
        f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE_MB}MB.",
        details={"size": size, "max_size": settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024},
    )


async def read_upload(upload, settings: Settings) -> bytes:
    """Read an uploaded file chunk by chunk, giving up as soon as it passes the size limit."""
    max_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    content = bytearray()
    while True:
        chunk = await upload.read(CHUNK_SIZE)
        if not chunk:
            break
        content.extend(chunk)
        if len(content) > max_bytes:
            raise _too_large(settings, len(content))
    return bytes(content)


def tenant_folder(tenant_id: str) -> str:
    """Stable, path-safe folder name for a tenant id."""
    return hashlib.sha256(tenant_id.encode("utf-8")).hexdigest()[:16]


def _extension(filename: Optional[str]) -> str:
    if not filename or "." not in filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower()


def save_component_image(
    content: bytes,
    filename: Optional[str],
    content_type: Optional[str],
    tenant_id: str,
    settings: Settings,
) -> dict:
    if not filename or not content:
        raise ValidationFailedError("No file uploaded", field="image")

    if len(content) > settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024:
        raise _too_large(settings, len(content))

    ext = _extension(filename)
    if content_type not in ALLOWED_IMAGE_TYPES or ext not in ALLOWED_EXTENSIONS:
        raise ValidationFailedError(
            "Only image files (jpg, png, gif, webp) are allowed",
            field="image",
        )

    folder = tenant_folder(tenant_id)
    target_dir = os.path.join(settings.UPLOAD_DIR, folder)
    os.makedirs(target_dir, exist_ok=True)

    stored_name = f"component-{uuid.uuid4().hex}.{ALLOWED_IMAGE_TYPES[content_type]}"
    file_path = os.path.join(target_dir, stored_name)
    with open(file_path, "wb") as f:
        f.write(content)

    image_path = f"{settings.UPLOAD_URL_PREFIX.rstrip('/')}/{folder}/{stored_name}"
    logger.info(
        "Component image stored",
        image_path=image_path,
        size=len(content),
        original_name=filename,
        tenant_id=tenant_id,
    )
    return {
        "message": "Image uploaded successfully",
        "image_path": image_path,
        "filename": stored_name,
    }
