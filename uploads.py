from io import BytesIO
from typing import Optional

import cloudinary
import cloudinary.exceptions
import cloudinary.uploader
from fastapi import APIRouter, File, UploadFile
from starlette.concurrency import run_in_threadpool

from config import config
from exceptions import ConfigurationError, UploadError
from logger import get_logger

logger = get_logger("uploads")

ALLOWED_IMAGE_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
)

router = APIRouter(prefix="/api/upload", tags=["upload"])


def configure_cloudinary() -> bool:
    """Push credentials into the cloudinary SDK; False when they are missing"""
    if not config.is_cloudinary_configured():
        return False
    cloudinary.config(
        cloud_name=config.CLOUDINARY_CLOUD_NAME,
        api_key=config.CLOUDINARY_API_KEY,
        api_secret=config.CLOUDINARY_API_SECRET,
        secure=True,
    )
    return True


def validate_image(content_type: Optional[str], size: int) -> None:
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise UploadError(
            f"Unsupported file type '{content_type}'. Allowed: {', '.join(ALLOWED_IMAGE_TYPES)}"
        )
    if size > config.UPLOAD_MAX_BYTES:
        raise UploadError(
            f"File too large. Maximum size is {config.UPLOAD_MAX_BYTES // (1024 * 1024)}MB",
            status_code=413,
        )


@router.post("")
async def upload_image(file: Optional[UploadFile] = File(None)):
    if file is None or not file.filename:
        raise UploadError("No file provided")

    # size is known once the multipart body is parsed
    if file.size is not None:
        validate_image(file.content_type, file.size)

    contents = await file.read()
    validate_image(file.content_type, len(contents))

    if not configure_cloudinary():
        raise ConfigurationError("Image hosting is not configured")

    try:
        result = await run_in_threadpool(
            cloudinary.uploader.upload,
            BytesIO(contents),
            folder=config.UPLOAD_FOLDER,
            resource_type="image",
        )
    except cloudinary.exceptions.Error as e:
        logger.error(f"Cloudinary upload error: {e}")
        raise UploadError(f"Image upload failed: {e}", status_code=502)

    logger.info(f"Uploaded {file.filename} as {result.get('public_id')}")
    return {
        "url": result.get("secure_url"),
        "publicId": result.get("public_id"),
        "filename": file.filename,
        "size": len(contents),
        "type": file.content_type,
    }
