# admin_api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials
from sqlmodel import Session

from admin_api.core.auth import bearer_scheme, require_admin
from admin_api.database import get_session
from admin_api.models.user import Admin
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.auth import LoginRequest, LoginResponse
from admin_api.schemas.user import AdminRead
from admin_api.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])

service = AuthService(UserRepository())


@router.post("/login", response_model=LoginResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Operator sign-in.

    - Supabase password sign-in, then the admins-table check.
    - Accounts that are not staff are signed out again (403).
    """
    return service.login(session, payload.email, payload.password)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
):
    """
    Revoke the caller's Supabase session.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    service.logout(credentials.credentials)
    return None


@router.get("/me", response_model=AdminRead)
def read_me(admin: Admin = Depends(require_admin)):
    """
    The authenticated operator.
    """
    return admin
