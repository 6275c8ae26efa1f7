# admin_api/models/user.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class User(SQLModel, table=True):
    """
    Marketplace member (renter / lister).

    Identity:
      - auth_user_id: Supabase auth.users.id once the member has signed in;
        rows created by staff may not be linked yet.

    Phone numbers are unique across members. Uniqueness is checked by the
    service before writes; the DB constraint is the last line.
    """

    __tablename__ = "users"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    name: str = Field(
        max_length=100,
        description="Member display name",
    )

    phone: str = Field(
        max_length=20,
        unique=True,
        index=True,
        description="Contact phone number, e.g. +91 9876543210",
    )

    email: str | None = Field(
        default=None,
        index=True,
        description="Optional email",
    )

    auth_user_id: uuid.UUID | None = Field(
        default=None,
        index=True,
        description="Matches Supabase auth.users.id when linked",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )


class Admin(SQLModel, table=True):
    """
    Staff allowed into the admin console.

    A Supabase session is only accepted by the API when its `sub`
    matches a row here.
    """

    __tablename__ = "admins"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    auth_user_id: uuid.UUID = Field(
        unique=True,
        index=True,
        description="Matches Supabase auth.users.id",
    )

    email: str = Field(
        index=True,
        description="Operator email",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
    )
