# admin_api/schemas/product.py
import uuid
from datetime import datetime
from typing import Literal
from urllib.parse import urlencode

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from admin_api.schemas.facet import FacetIds, ProductFacets

ProductStatus = Literal["pending", "approved", "rejected", "draft"]
ListingStatus = Literal["Paid", "Unpaid", "Free", "Expired"]

SortColumn = Literal["name", "type", "category", "product_id", "price", "created_at"]
SortDirection = Literal["asc", "desc"]

# Every listing on the platform is a rental; the "type" column shows this tag.
RENT_TYPE = "Rent"


class ProductCreate(SQLModel):
    """
    Payload for creating a product on behalf of a member.

    Images are uploaded afterwards through the images endpoint so they go
    through WebP optimization.
    """

    model_config = ConfigDict(extra="forbid")

    owner_user_id: uuid.UUID
    title: str = Field(max_length=200)
    product_code: str | None = Field(default=None, max_length=50)
    description: str | None = None
    price: str = Field(max_length=50)
    original_price: str | None = Field(default=None, max_length=50)
    status: ProductStatus = "pending"
    listing_status: ListingStatus = "Paid"
    admin_note: str | None = None
    facets: FacetIds = Field(default_factory=FacetIds)

    @field_validator("title", "price")
    @classmethod
    def not_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProductUpdate(SQLModel):
    """
    Partial update payload for products.
    All fields are optional; `facets`, when given, replaces every link.
    """

    model_config = ConfigDict(extra="forbid")

    owner_user_id: uuid.UUID | None = None
    title: str | None = Field(default=None, max_length=200)
    product_code: str | None = Field(default=None, max_length=50)
    description: str | None = None
    price: str | None = Field(default=None, max_length=50)
    original_price: str | None = Field(default=None, max_length=50)
    admin_note: str | None = None
    facets: FacetIds | None = None

    @field_validator("title", "price")
    @classmethod
    def not_empty(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("field cannot be empty")
        return v


class ProductRead(SQLModel):
    """
    Product representation for the edit form.
    """

    id: uuid.UUID
    owner_user_id: uuid.UUID
    title: str
    product_code: str | None
    description: str | None
    price: str
    original_price: str | None
    images: list[str]
    primary_image_index: int
    status: str
    is_active: bool
    listing_status: str
    admin_note: str | None
    created_at: datetime
    facets: ProductFacets = Field(default_factory=ProductFacets)


class ProductStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    status: ProductStatus
    admin_note: str | None = None


class ListingStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    listing_status: ListingStatus


class PrimaryImageUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    index: int = Field(ge=0)


class ImageOrderUpdate(SQLModel):
    """
    New gallery order expressed as a permutation of current positions.
    """

    model_config = ConfigDict(extra="forbid")

    order: list[int]


class AdminProductRow(SQLModel):
    """
    One row of the admin product table: product fields plus owner details
    and aggregated facet names.
    """

    id: uuid.UUID
    product_code: str | None = None
    owner_user_id: uuid.UUID
    owner_name: str | None = None
    owner_phone: str | None = None
    name: str
    type: str = RENT_TYPE
    price: str = ""
    original_price: str | None = None
    status: str = "pending"
    is_active: bool = False
    listing_status: str = "Paid"
    primary_image: str | None = None
    image_count: int = 0
    created_at: datetime | None = None
    facets: ProductFacets = Field(default_factory=ProductFacets)


class ProductFilterParams(SQLModel):
    """
    Filter + sort state of the admin product table.

    Parsed from query parameters, and serialized back with
    `to_query_string()` so the frontend can keep it in the URL.

    - owner / facet: "all" disables the filter.
    - facet: "<kind>:<id>" (e.g. "color:3f2a...") or a bare id, which is
      looked up in type, occasion, color, material, city order.
    - name / owner_text / facet_text / product_id / price: per-column
      case-insensitive substring filters.
    """

    owner: str = "all"
    facet: str = "all"
    q: str = ""
    name: str = ""
    owner_text: str = ""
    facet_text: str = ""
    product_id: str = ""
    price: str = ""
    sort_by: SortColumn | None = None
    sort_dir: SortDirection = "asc"

    def to_query_string(self) -> str:
        """Query string with default values omitted."""
        return urlencode(self.model_dump(mode="json", exclude_defaults=True))


class SortLinkParams(ProductFilterParams):
    """Current filter state plus the column header that was clicked."""

    column: SortColumn
