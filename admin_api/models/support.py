# admin_api/models/support.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class ContactRequest(SQLModel, table=True):
    """
    Message submitted through the public contact form.

    status: new | in_progress | resolved
    """

    __tablename__ = "contact_requests"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100)
    email: str | None = Field(default=None)
    phone: str | None = Field(default=None, max_length=20)
    message: str
    status: str = Field(default="new", index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )


class Report(SQLModel, table=True):
    """
    Abuse report filed by one member against another (optionally about a
    specific listing).

    status: new | reviewed | resolved | dismissed
    """

    __tablename__ = "reports"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    reporter_user_id: uuid.UUID | None = Field(default=None, foreign_key="users.id", index=True)
    reported_user_id: uuid.UUID | None = Field(default=None, foreign_key="users.id", index=True)
    product_id: uuid.UUID | None = Field(default=None, foreign_key="products.id", index=True)
    reason: str = Field(max_length=200)
    details: str | None = Field(default=None)
    status: str = Field(default="new", index=True)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        index=True,
    )


class WebsiteSetting(SQLModel, table=True):
    """
    Key/value switches for the public site (e.g. website_enabled).
    """

    __tablename__ = "website_settings"

    key: str = Field(primary_key=True, max_length=100)
    value: str = Field(description="Stored as text; interpreted per key")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
