# admin_api/core/auth.py
import uuid
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlmodel import Session

from admin_api.core.config import get_settings
from admin_api.database import get_session
from admin_api.models.user import Admin
from admin_api.repositories.user_repo import UserRepository

# HTTP Bearer scheme:
# - auto_error=False => a missing header reaches require_admin, which
#   answers 401 with our own message instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)

repo = UserRepository()


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and verify a Supabase access token (JWT).

    Verification:
      - signature (HS256 using SUPABASE_JWT_SECRET)
      - expiration time (exp)
      - audience is NOT verified (Supabase 'aud' may vary)

    Raises:
        HTTPException(401): if token is invalid/expired.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.SUPABASE_JWT_ALG],
            options={"verify_aud": False},
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def auth_user_id_from_claims(payload: dict[str, Any]) -> uuid.UUID:
    """
    Extract the Supabase auth user id ('sub') as a UUID.

    Raises:
        HTTPException(401): if 'sub' is missing or malformed.
    """
    sub = payload.get("sub")
    if not sub:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token missing sub",
        )
    try:
        return uuid.UUID(sub)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid sub in token",
        )


def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    session: Session = Depends(get_session),
) -> Admin:
    """
    Enforce an authenticated staff member.

    Flow:
      1. No Authorization header => 401.
      2. Decode JWT => 'sub' (Supabase auth user id).
      3. Look up the admins row for that id; none => 403.

    Returns:
        The Admin row of the caller.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    payload = decode_access_token(credentials.credentials)
    auth_user_id = auth_user_id_from_claims(payload)

    admin = repo.get_admin_by_auth_id(session, auth_user_id)
    if admin is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return admin
