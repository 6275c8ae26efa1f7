# admin_api/services/image_upload.py
import logging

from fastapi import HTTPException, status

from admin_api.core.config import get_settings
from admin_api.core.image_optimizer import (
    ImageDecodeError,
    ImageEncodeError,
    OptimizedImage,
    optimize_image,
    reduction_ratio,
)
from admin_api.core.storage_utils import StorageError, generate_filename, upload_to_storage

logger = logging.getLogger("uvicorn")

ALLOWED_IMAGE_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
        "image/bmp",
        "image/tiff",
    }
)


def validate_image(content_type: str | None, file_bytes: bytes) -> None:
    """
    Reject uploads that are obviously not images or too large to process.
    """
    if content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported image type. Allowed: JPEG, PNG, WEBP, GIF, BMP, TIFF.",
        )

    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded file is empty",
        )

    max_bytes = get_settings().MAX_UPLOAD_BYTES
    if len(file_bytes) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Image too large (max {max_bytes // (1024 * 1024)}MB).",
        )


def optimize_upload(content_type: str | None, file_bytes: bytes) -> OptimizedImage:
    """
    Validate and re-encode one upload as WebP.

    Raises:
        HTTPException(400): unsupported / undecodable image.
        HTTPException(422): the image decoded but could not be encoded.
    """
    validate_image(content_type, file_bytes)
    try:
        optimized = optimize_image(file_bytes, len(file_bytes))
    except ImageDecodeError as e:
        logger.warning(f"Rejected upload: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Could not read the uploaded image",
        )
    except ImageEncodeError as e:
        logger.error(f"WebP conversion failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Could not convert the image",
        )

    logger.info(
        f"Optimized upload {len(file_bytes)} -> {optimized.size} bytes "
        f"({reduction_ratio(optimized.size, len(file_bytes)) * 100:.1f}% reduction)"
    )
    return optimized


def store_image(prefix: str, image: OptimizedImage) -> str:
    """
    Upload an optimized image under `<prefix>/<uuid>.webp`.

    Returns:
        Public URL of the stored object.

    Raises:
        HTTPException(502): if Storage rejects the upload.
    """
    path = f"{prefix}/{generate_filename('webp')}"
    try:
        return upload_to_storage(path, image.data, image.content_type)
    except StorageError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Image upload to storage failed",
        )


def optimize_and_store(prefix: str, content_type: str | None, file_bytes: bytes) -> str:
    return store_image(prefix, optimize_upload(content_type, file_bytes))
