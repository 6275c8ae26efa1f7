# admin_api/schemas/auth.py
from pydantic import EmailStr, ConfigDict
from sqlmodel import SQLModel, Field

from admin_api.schemas.user import AdminRead


class LoginRequest(SQLModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(SQLModel):
    """
    Supabase session tokens for an operator that passed the admins check.
    """

    access_token: str
    refresh_token: str | None = None
    token_type: str = "bearer"
    expires_in: int | None = None
    admin: AdminRead
