# admin_api/schemas/catalog.py
import uuid
from datetime import datetime

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field


class CategoryCreate(SQLModel):
    """
    - slug is optional: if omitted, generated from `name`.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    slug: str | None = Field(default=None, max_length=120)
    image_url: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v


class CategoryUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    slug: str | None = Field(default=None, max_length=120)
    image_url: str | None = None

    @field_validator("name", "slug")
    @classmethod
    def validate_text(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class CategoryRead(SQLModel):
    id: uuid.UUID
    name: str
    slug: str
    image_url: str | None
    display_order: int
    created_at: datetime


class HeroSlideCreate(SQLModel):
    """
    Slides are usually created by uploading an image; this payload covers
    slides whose image already lives in Storage.
    """

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    image_url: str
    link_url: str | None = None
    is_active: bool = True


class HeroSlideUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(default=None, max_length=200)
    link_url: str | None = None
    is_active: bool | None = None


class HeroSlideRead(SQLModel):
    id: uuid.UUID
    title: str | None
    image_url: str
    link_url: str | None
    is_active: bool
    display_order: int
    created_at: datetime
