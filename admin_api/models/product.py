# admin_api/models/product.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, JSON
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    A garment listed for rent by a member.

    Images:
      - `images` holds public Storage URLs in gallery order; the list is
        replaced (never mutated in place) so the JSON column is flagged dirty.
      - `primary_image_index` points into `images`; out-of-range values
        fall back to the first image.

    Moderation:
      - status: pending | approved | rejected | draft
      - is_active mirrors status == "approved"
    """

    __tablename__ = "products"

    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        index=True,
    )

    owner_user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True,
        description="FK to users.id (the lister)",
    )

    title: str = Field(
        max_length=200,
        index=True,
        description="Display name of the garment",
    )

    product_code: str | None = Field(
        default=None,
        max_length=50,
        index=True,
        description="Human-facing product id printed on tags",
    )

    description: str | None = Field(default=None)

    price: str = Field(
        default="",
        max_length=50,
        description="Rental price as displayed, e.g. '₹1,500'",
    )

    original_price: str | None = Field(
        default=None,
        max_length=50,
        description="Retail price as displayed",
    )

    images: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
    )

    primary_image_index: int = Field(default=0, ge=0)

    status: str = Field(
        default="pending",
        index=True,
        description="Moderation status: pending | approved | rejected | draft",
    )

    is_active: bool = Field(
        default=False,
        index=True,
        description="Visible on the storefront",
    )

    listing_status: str = Field(
        default="Paid",
        description="Listing fee state shown to staff",
    )

    admin_note: str | None = Field(default=None)

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Creation timestamp (UTC)",
    )

    def primary_image(self) -> str | None:
        if not self.images:
            return None
        if 0 <= self.primary_image_index < len(self.images):
            return self.images[self.primary_image_index]
        return self.images[0]
