# admin_api/schemas/user.py
import re
import uuid
from datetime import datetime

from pydantic import EmailStr, ConfigDict, field_validator
from sqlmodel import SQLModel, Field

PHONE_RE = re.compile(r"^\+?[0-9][0-9 \-]{6,18}$")


def _normalize_phone(v: str) -> str:
    v = " ".join(v.split())
    if not PHONE_RE.match(v):
        raise ValueError("invalid phone number")
    return v


class UserCreate(SQLModel):
    """
    Payload for staff creating a member profile.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    phone: str = Field(max_length=20)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str) -> str:
        return _normalize_phone(v)


class UserUpdate(SQLModel):
    """
    Partial update. Phone changes are re-checked for uniqueness.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=20)
    email: EmailStr | None = None

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("phone")
    @classmethod
    def normalize_phone(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _normalize_phone(v)


class UserRead(SQLModel):
    """Response schema returned to clients."""

    id: uuid.UUID
    name: str
    phone: str
    email: str | None
    auth_user_id: uuid.UUID | None
    created_at: datetime
    product_count: int = 0


class AdminRead(SQLModel):
    id: uuid.UUID
    auth_user_id: uuid.UUID
    email: str
