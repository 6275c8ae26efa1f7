# admin_api/models/facet.py
import uuid
from datetime import datetime, timezone
from enum import Enum

from sqlmodel import SQLModel, Field


class FacetKind(str, Enum):
    """
    The five product-tagging dimensions.

    Declaration order is the lookup priority used when a bare facet id has
    to be resolved without its kind.
    """

    product_type = "product_type"
    occasion = "occasion"
    color = "color"
    material = "material"
    city = "city"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProductType(SQLModel, table=True):
    """Garment type (saree, lehenga, sherwani...)."""

    __tablename__ = "product_types"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100, index=True)
    image_url: str | None = Field(default=None, description="Tile image on the storefront")
    display_order: int = Field(default=0, ge=0, index=True)
    created_at: datetime = Field(default_factory=_now)


class Occasion(SQLModel, table=True):
    """Occasion a garment is rented for (wedding, sangeet...)."""

    __tablename__ = "occasions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100, index=True)
    image_url: str | None = Field(default=None)
    display_order: int = Field(default=0, ge=0, index=True)
    created_at: datetime = Field(default_factory=_now)


class Color(SQLModel, table=True):
    __tablename__ = "colors"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100, index=True)
    hex_code: str | None = Field(default=None, max_length=9, description="Swatch, e.g. #B22222")
    display_order: int = Field(default=0, ge=0, index=True)
    created_at: datetime = Field(default_factory=_now)


class Material(SQLModel, table=True):
    __tablename__ = "materials"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100, index=True)
    display_order: int = Field(default=0, ge=0, index=True)
    created_at: datetime = Field(default_factory=_now)


class City(SQLModel, table=True):
    """City where a product can be picked up."""

    __tablename__ = "cities"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
    name: str = Field(max_length=100, index=True)
    state: str | None = Field(default=None, max_length=100)
    display_order: int = Field(default=0, ge=0, index=True)
    created_at: datetime = Field(default_factory=_now)


# ----- Junction tables (product <-> facet) -----


class ProductProductType(SQLModel, table=True):
    __tablename__ = "product_product_types"

    product_id: uuid.UUID = Field(foreign_key="products.id", primary_key=True)
    product_type_id: uuid.UUID = Field(foreign_key="product_types.id", primary_key=True)


class ProductOccasion(SQLModel, table=True):
    __tablename__ = "product_occasions"

    product_id: uuid.UUID = Field(foreign_key="products.id", primary_key=True)
    occasion_id: uuid.UUID = Field(foreign_key="occasions.id", primary_key=True)


class ProductColor(SQLModel, table=True):
    __tablename__ = "product_colors"

    product_id: uuid.UUID = Field(foreign_key="products.id", primary_key=True)
    color_id: uuid.UUID = Field(foreign_key="colors.id", primary_key=True)


class ProductMaterial(SQLModel, table=True):
    __tablename__ = "product_materials"

    product_id: uuid.UUID = Field(foreign_key="products.id", primary_key=True)
    material_id: uuid.UUID = Field(foreign_key="materials.id", primary_key=True)


class ProductCity(SQLModel, table=True):
    __tablename__ = "product_cities"

    product_id: uuid.UUID = Field(foreign_key="products.id", primary_key=True)
    city_id: uuid.UUID = Field(foreign_key="cities.id", primary_key=True)


FACET_MODELS: dict[FacetKind, type[SQLModel]] = {
    FacetKind.product_type: ProductType,
    FacetKind.occasion: Occasion,
    FacetKind.color: Color,
    FacetKind.material: Material,
    FacetKind.city: City,
}

# kind -> (junction model, name of its facet FK column)
FACET_LINKS: dict[FacetKind, tuple[type[SQLModel], str]] = {
    FacetKind.product_type: (ProductProductType, "product_type_id"),
    FacetKind.occasion: (ProductOccasion, "occasion_id"),
    FacetKind.color: (ProductColor, "color_id"),
    FacetKind.material: (ProductMaterial, "material_id"),
    FacetKind.city: (ProductCity, "city_id"),
}

# Kinds whose rows carry an uploadable image
IMAGE_FACETS: frozenset[FacetKind] = frozenset({FacetKind.product_type, FacetKind.occasion})
