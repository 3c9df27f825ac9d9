import logging

from botocore.exceptions import BotoCoreError, ClientError
from fastapi import UploadFile, status

from app.core.config import settings
from app.utils import error_response
from app.utils import r2 as r2utils

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]

AVATAR_FOLDER = "user-avatars"
HELPER_PROFILE_FOLDER = "helper-profiles"


async def store_image(file: UploadFile, folder: str, owner: str) -> str:
    """Validate an uploaded image, push it to blob storage and return its URL."""
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise error_response(
            f"Invalid image type. Allowed: {ALLOWED_IMAGE_TYPES}",
            {"image": "invalid_type"},
            status.HTTP_400_BAD_REQUEST,
        )
    try:
        content = await file.read()
    finally:
        await file.close()
    if not content:
        raise error_response("No file provided.", {"image": "required"}, status.HTTP_400_BAD_REQUEST)
    if len(content) > settings.MAX_UPLOAD_BYTES:
        raise error_response(
            f"Image too large. Max size is {settings.MAX_UPLOAD_BYTES} bytes.",
            {"image": "too_large"},
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )
    try:
        return r2utils.upload_bytes(content, folder, owner, file.filename, file.content_type)
    except r2utils.StorageNotConfigured:
        raise error_response(
            "Image storage is not configured.",
            {"image": "storage_unavailable"},
            status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    except (BotoCoreError, ClientError) as exc:
        logger.error("Image upload to %s failed for %s: %s", folder, owner, exc)
        raise error_response(
            "Server Error during image upload.",
            {"image": "upload_failed"},
            status.HTTP_502_BAD_GATEWAY,
        )
