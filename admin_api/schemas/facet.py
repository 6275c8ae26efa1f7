# admin_api/schemas/facet.py
import re
import uuid

from pydantic import ConfigDict, field_validator
from sqlmodel import SQLModel, Field

from admin_api.models.facet import FacetKind

HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class ProductFacets(SQLModel):
    """
    Facet names attached to one product, one list per dimension.

    Lists are duplicate-free and keep the order the association rows were
    returned in.
    """

    product_types: list[str] = Field(default_factory=list)
    occasions: list[str] = Field(default_factory=list)
    colors: list[str] = Field(default_factory=list)
    materials: list[str] = Field(default_factory=list)
    cities: list[str] = Field(default_factory=list)

    def names(self, kind: FacetKind) -> list[str]:
        return getattr(self, FACET_FIELDS[kind])

    def text(self) -> str:
        """All facet names, dimension by dimension, comma separated."""
        return ", ".join(
            name for kind in FacetKind for name in self.names(kind)
        )


# kind -> ProductFacets attribute
FACET_FIELDS: dict[FacetKind, str] = {
    FacetKind.product_type: "product_types",
    FacetKind.occasion: "occasions",
    FacetKind.color: "colors",
    FacetKind.material: "materials",
    FacetKind.city: "cities",
}


class FacetIds(SQLModel):
    """
    Facet ids chosen for a product, per dimension.
    """

    model_config = ConfigDict(extra="forbid")

    product_type_ids: list[uuid.UUID] = Field(default_factory=list)
    occasion_ids: list[uuid.UUID] = Field(default_factory=list)
    color_ids: list[uuid.UUID] = Field(default_factory=list)
    material_ids: list[uuid.UUID] = Field(default_factory=list)
    city_ids: list[uuid.UUID] = Field(default_factory=list)

    def ids(self, kind: FacetKind) -> list[uuid.UUID]:
        return getattr(self, f"{kind.value}_ids")


class FacetRead(SQLModel):
    """
    Uniform read model for all five facet tables. Attributes a kind does
    not carry stay None.
    """

    id: uuid.UUID
    kind: FacetKind
    name: str
    display_order: int
    image_url: str | None = None
    hex_code: str | None = None
    state: str | None = None


class FacetCreate(SQLModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(max_length=100)
    image_url: str | None = None
    hex_code: str | None = None
    state: str | None = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("hex_code")
    @classmethod
    def validate_hex(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not HEX_COLOR_RE.match(v):
            raise ValueError("hex_code must look like #RRGGBB")
        return v.upper()


class FacetUpdate(SQLModel):
    """
    Partial update payload. All fields are optional.
    """

    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, max_length=100)
    image_url: str | None = None
    hex_code: str | None = None
    state: str | None = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @field_validator("hex_code")
    @classmethod
    def validate_hex(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not HEX_COLOR_RE.match(v):
            raise ValueError("hex_code must look like #RRGGBB")
        return v.upper()


class ReorderPayload(SQLModel):
    """
    Full ordering after a drag-and-drop: ids in their new display order.
    """

    model_config = ConfigDict(extra="forbid")

    ids: list[uuid.UUID]

    @field_validator("ids")
    @classmethod
    def no_duplicates(cls, v: list[uuid.UUID]) -> list[uuid.UUID]:
        if len(set(v)) != len(v):
            raise ValueError("ids must not contain duplicates")
        return v
