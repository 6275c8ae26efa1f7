# admin_api/core/image_optimizer.py
"""
WebP re-encoding with a size budget.

Uploads are re-encoded before they reach Storage: a descending quality sweep
looks for the first encode that saves at least 30% of the original bytes,
large sources are downscaled first, and a low-quality encode is the last
resort so the caller always gets *some* output.
"""
import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger("uvicorn")

# Pillow WebP quality is 0..100
QUALITY_LEVELS: tuple[int, ...] = (70, 60, 50, 40, 30, 25)
RESIZE_RETRY_QUALITY_LEVELS: tuple[int, ...] = (50, 40, 30)
LAST_RESORT_QUALITY = 25

RESIZE_THRESHOLD_BYTES = 1024 * 1024  # 1MB
MAX_DIMENSION = 1920

# Stop searching once an encode is at most 70% of the original (>= 30% saved)
TARGET_SIZE_RATIO = 0.7

WEBP_CONTENT_TYPE = "image/webp"


class ImageDecodeError(ValueError):
    """The uploaded bytes are not an image Pillow can read."""


class ImageEncodeError(RuntimeError):
    """No quality / size combination produced an encoded image."""


@dataclass(frozen=True)
class OptimizedImage:
    data: bytes
    size: int
    quality: int
    resized: bool
    content_type: str = WEBP_CONTENT_TYPE


def reduction_ratio(new_size: int, original_size: int) -> float:
    """Fraction of bytes saved: 1 - new/original (0.0 for an empty original)."""
    if original_size <= 0:
        return 0.0
    return 1 - (new_size / original_size)


def _decode(file_bytes: bytes) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(file_bytes))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e

    # Phone photos carry their rotation in EXIF
    image = ImageOps.exif_transpose(image)

    if image.mode in ("RGB", "RGBA"):
        return image
    has_alpha = image.mode in ("LA", "PA") or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")


def _scaled_size(width: int, height: int, max_dimension: int) -> tuple[int, int]:
    ratio = min(max_dimension / width, max_dimension / height)
    if ratio >= 1:
        return width, height
    return max(1, int(width * ratio)), max(1, int(height * ratio))


def encode_webp(
    image: Image.Image,
    quality: int,
    max_dimension: int | None = None,
) -> bytes:
    """
    Encode `image` as WebP at `quality`, optionally bounding the longer side.

    Never upscales.
    """
    target = image
    if max_dimension is not None:
        size = _scaled_size(image.width, image.height, max_dimension)
        if size != image.size:
            target = image.resize(size, Image.Resampling.LANCZOS)

    buffer = io.BytesIO()
    target.save(buffer, format="WEBP", quality=quality)
    return buffer.getvalue()


def optimize_image(file_bytes: bytes, original_size: int | None = None) -> OptimizedImage:
    """
    Re-encode an uploaded image as WebP, trading quality for size.

    Steps:
      1. Quality sweep 70 -> 25 (downscaled to 1920px first when the source
         is over 1MB); stop at the first encode <= 70% of the original.
      2. If nothing beat the original and step 1 did not resize, retry at
         50/40/30 with a forced 1920px bound.
      3. If still nothing beat the original, encode at quality 25 with the
         1920px bound.

    Returns the smallest candidate observed, which may still be larger than
    the original for tiny inputs.

    Raises:
        ImageDecodeError: if the bytes cannot be decoded (nothing to upload).
        ImageEncodeError: if every encode attempt failed.
    """
    if original_size is None:
        original_size = len(file_bytes)

    image = _decode(file_bytes)
    target_size = original_size * TARGET_SIZE_RATIO

    should_resize = original_size > RESIZE_THRESHOLD_BYTES
    best: OptimizedImage | None = None

    def attempt(quality: int, max_dimension: int | None) -> OptimizedImage | None:
        nonlocal best
        try:
            data = encode_webp(image, quality, max_dimension)
        except (OSError, ValueError) as e:
            logger.warning(f"WebP encode failed at quality {quality}: {e}")
            return None
        candidate = OptimizedImage(
            data=data,
            size=len(data),
            quality=quality,
            resized=max_dimension is not None,
        )
        if best is None or candidate.size < best.size:
            best = candidate
        return candidate

    def sweep(levels: tuple[int, ...], max_dimension: int | None) -> None:
        for quality in levels:
            candidate = attempt(quality, max_dimension)
            if candidate is not None and candidate.size <= target_size:
                logger.info(
                    f"Image compressed at quality {quality}: "
                    f"{reduction_ratio(candidate.size, original_size) * 100:.1f}% reduction"
                )
                return

    sweep(QUALITY_LEVELS, MAX_DIMENSION if should_resize else None)

    if (best is None or best.size >= original_size) and not should_resize:
        logger.info("No size gain at full resolution, retrying with resize")
        sweep(RESIZE_RETRY_QUALITY_LEVELS, MAX_DIMENSION)

    if best is None or best.size >= original_size:
        logger.info("Falling back to last-resort low quality encode")
        attempt(LAST_RESORT_QUALITY, MAX_DIMENSION)

    if best is None:
        raise ImageEncodeError("Failed to encode image as WebP")

    return best
