# admin_api/services/auth_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session
from supabase import AuthError

from admin_api.core.config import get_settings
from admin_api.core.supabase_client import supabase_public
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.auth import LoginResponse
from admin_api.schemas.user import AdminRead

logger = logging.getLogger("uvicorn")


class AuthService:
    """
    Operator sign-in / sign-out through Supabase Auth.

    Responsibilities:
      - refuse to talk to Supabase while config holds placeholder values
      - password sign-in, then the admins-table check
      - sign out again when the account is not staff, so no session is
        left authenticated but unauthorized
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def login(self, session: Session, email: str, password: str) -> LoginResponse:
        if get_settings().has_placeholder_supabase_config():
            logger.error("Login refused: SUPABASE_URL / SUPABASE_KEY hold placeholder values")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Supabase is not configured",
            )

        client = supabase_public()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        if response.session is None or response.user is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid email or password",
            )

        admin = self.repo.get_admin_by_auth_id(session, uuid.UUID(str(response.user.id)))
        if admin is None:
            logger.warning(f"Non-admin sign-in attempt: {email}")
            client.auth.sign_out()
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Admin access required",
            )

        return LoginResponse(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_in=response.session.expires_in,
            admin=AdminRead.model_validate(admin, from_attributes=True),
        )

    def logout(self, access_token: str) -> None:
        """
        Revoke the operator's Supabase session.

        An already expired / revoked token is not an error for the caller.
        """
        try:
            supabase_public().auth.admin.sign_out(access_token)
        except AuthError as e:
            logger.warning(f"Sign-out ignored: {e}")
