# admin_api/core/storage_utils.py
import logging
import uuid

from admin_api.core.config import get_settings
from admin_api.core.supabase_client import supabase_admin

logger = logging.getLogger("uvicorn")


class StorageError(RuntimeError):
    """Raised when Supabase Storage rejects an upload."""


def _bucket_name() -> str:
    return get_settings().STORAGE_BUCKET


def upload_to_storage(
    path: str,
    file_bytes: bytes,
    content_type: str = "image/webp",
) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    If a file already exists at this path, it will be overwritten
    thanks to the 'upsert' option.

    Args:
        path: Full object path inside the bucket.
              Example: "products/<uuid>/<uuid>.webp"
        file_bytes: File content in bytes.
        content_type: MIME type stored with the object.

    Returns:
        Public URL to the uploaded file.

    Raises:
        StorageError: if the Supabase client fails.
    """
    try:
        bucket = supabase_admin().storage.from_(_bucket_name())
        bucket.upload(
            path,
            file_bytes,
            {"content-type": content_type, "upsert": "true"},
        )
        return bucket.get_public_url(path)
    except Exception as e:
        logger.error(f"Storage upload failed for {path}: {e}")
        raise StorageError(str(e)) from e


def delete_from_storage(path: str) -> None:
    """
    Delete a file from Supabase Storage by its object path.

    Best-effort: failures are logged, the row deletion that triggered the
    cleanup still goes through.
    """
    try:
        supabase_admin().storage.from_(_bucket_name()).remove([path])
    except Exception as e:
        logger.warning(f"Storage cleanup failed for {path}: {e}")


def extract_path_from_public_url(url: str) -> str | None:
    """
    Given a public URL, extract the object path relative to the bucket.

    Example:
        https://<proj>.supabase.co/storage/v1/object/public/product-images/products/p/a.webp
        -> 'products/p/a.webp'
    """
    marker = f"/storage/v1/object/public/{_bucket_name()}/"
    idx = url.find(marker)
    if idx == -1:
        return None
    # get_public_url may leave a trailing "?"
    return url[idx + len(marker) :].split("?", 1)[0] or None


def delete_public_url(url: str | None) -> None:
    """
    Convenience helper: delete a file by its public URL.
    No-op if the URL does not belong to this bucket.
    """
    if not url:
        return
    path = extract_path_from_public_url(url)
    if path:
        delete_from_storage(path)


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "webp")

    Returns:
        A filename like "<uuid4>.webp"
    """
    return f"{uuid.uuid4()}.{ext}"
