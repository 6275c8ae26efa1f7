import io
import time
import uuid

from jose import jwt
from PIL import Image

from admin_api.core.config import get_settings

API = get_settings().API_V1_STR
STORAGE_PUBLIC = "https://rentals-test.supabase.co/storage/v1/object/public"


def make_token(auth_user_id: uuid.UUID, expires_in: int = 3600) -> str:
    claims = {"sub": str(auth_user_id), "exp": int(time.time()) + expires_in}
    return jwt.encode(claims, get_settings().SUPABASE_JWT_SECRET, algorithm="HS256")


def gradient_image(width: int, height: int, fmt: str = "BMP") -> bytes:
    """Smooth RGB image; uncompressed formats leave plenty of room for WebP."""
    base = Image.linear_gradient("L").resize((width, height))
    image = Image.merge("RGB", (base, base.transpose(Image.Transpose.FLIP_LEFT_RIGHT), base))
    buffer = io.BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()
