# admin_api/models/catalog.py
import uuid
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


class Category(SQLModel, table=True):
    """
    Storefront navigation category (e.g. "Women", "Men", "Accessories").
    """

    __tablename__ = "categories"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    name: str = Field(max_length=100)

    slug: str = Field(
        max_length=120,
        unique=True,
        index=True,
        description="URL-friendly identifier (unique)",
    )

    image_url: str | None = Field(default=None)

    display_order: int = Field(default=0, ge=0, index=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class HeroSlide(SQLModel, table=True):
    """
    Homepage hero banner. Only active slides are shown, by display_order.
    """

    __tablename__ = "hero_slides"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    title: str | None = Field(default=None, max_length=200)

    image_url: str = Field(description="Public URL stored in Supabase Storage")

    link_url: str | None = Field(default=None)

    is_active: bool = Field(default=True, index=True)

    display_order: int = Field(default=0, ge=0, index=True)

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
