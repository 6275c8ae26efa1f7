# admin_api/services/facet_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session, SQLModel

from admin_api.core.storage_utils import delete_public_url
from admin_api.models.facet import FACET_MODELS, IMAGE_FACETS, FacetKind
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.schemas.facet import FacetCreate, FacetRead, FacetUpdate
from admin_api.services.image_upload import optimize_and_store
from admin_api.services.ordering import apply_order

# Optional attributes and the kinds that carry them
KIND_ATTRIBUTES: dict[str, frozenset[FacetKind]] = {
    "image_url": IMAGE_FACETS,
    "hex_code": frozenset({FacetKind.color}),
    "state": frozenset({FacetKind.city}),
}


def to_read(kind: FacetKind, row: SQLModel) -> FacetRead:
    return FacetRead(
        id=row.id,
        kind=kind,
        name=row.name,
        display_order=row.display_order,
        image_url=getattr(row, "image_url", None),
        hex_code=getattr(row, "hex_code", None),
        state=getattr(row, "state", None),
    )


class FacetService:
    """
    Business logic for product types, occasions, colors, materials, cities.

    Responsibilities:
      - per-kind attribute rules (hex only on colors, state only on cities...)
      - case-insensitive name uniqueness within a kind
      - display_order maintenance (append on create, drag-and-drop reorder)
      - facet image upload through the WebP optimizer
    """

    def __init__(self, repo: FacetRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _check_attributes(kind: FacetKind, values: dict) -> None:
        for attr, kinds in KIND_ATTRIBUTES.items():
            if values.get(attr) is not None and kind not in kinds:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=f"{kind.value} does not support '{attr}'",
                )

    def _ensure_unique_name(
        self,
        session: Session,
        kind: FacetKind,
        name: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        lowered = name.lower()
        for row in self.repo.list_all(session, kind):
            if row.id != exclude_id and row.name.lower() == lowered:
                raise HTTPException(
                    status_code=status.HTTP_409_CONFLICT,
                    detail=f"{kind.value} '{name}' already exists",
                )

    def _get(self, session: Session, kind: FacetKind, facet_id: uuid.UUID) -> SQLModel:
        row = self.repo.get_by_id(session, kind, facet_id)
        if row is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"{kind.value} not found",
            )
        return row

    # ----- Queries -----

    def list_facets(self, session: Session, kind: FacetKind) -> list[FacetRead]:
        return [to_read(kind, row) for row in self.repo.list_all(session, kind)]

    def name_tables(self, session: Session) -> dict[FacetKind, dict[uuid.UUID, str]]:
        """facet id -> name, for every kind."""
        return {kind: self.repo.name_table(session, kind) for kind in FacetKind}

    def ensure_exist(self, session: Session, kind: FacetKind, facet_ids: list[uuid.UUID]) -> None:
        """
        Raises:
            HTTPException(400): if any id is unknown for this kind.
        """
        wanted = set(facet_ids)
        found = {row.id for row in self.repo.list_by_ids(session, kind, list(wanted))}
        missing = wanted - found
        if missing:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Unknown {kind.value} ids: {', '.join(sorted(str(m) for m in missing))}",
            )

    # ----- Mutations -----

    def create_facet(self, session: Session, kind: FacetKind, payload: FacetCreate) -> FacetRead:
        """
        Create a facet at the end of the current display order.
        """
        values = payload.model_dump(exclude_none=True)
        self._check_attributes(kind, values)
        self._ensure_unique_name(session, kind, payload.name)

        model = FACET_MODELS[kind]
        row = model(**values, display_order=self.repo.next_display_order(session, kind))
        return to_read(kind, self.repo.create(session, row))

    def update_facet(
        self,
        session: Session,
        kind: FacetKind,
        facet_id: uuid.UUID,
        payload: FacetUpdate,
    ) -> FacetRead:
        row = self._get(session, kind, facet_id)
        values = payload.model_dump(exclude_unset=True)
        self._check_attributes(kind, values)

        if values.get("name") is not None:
            self._ensure_unique_name(session, kind, values["name"], exclude_id=row.id)

        for attr, value in values.items():
            if attr == "name" and value is None:
                continue
            setattr(row, attr, value)
        return to_read(kind, self.repo.update(session, row))

    def delete_facet(self, session: Session, kind: FacetKind, facet_id: uuid.UUID) -> None:
        """
        Delete a facet, its product links, and its stored image.
        """
        row = self._get(session, kind, facet_id)
        image_url = getattr(row, "image_url", None)
        self.repo.delete(session, kind, row)
        delete_public_url(image_url)

    def reorder_facets(
        self,
        session: Session,
        kind: FacetKind,
        ordered_ids: list[uuid.UUID],
    ) -> list[FacetRead]:
        """
        Apply a drag-and-drop order: the id at position i gets display_order i.

        The list must contain every facet of the kind exactly once.
        """
        rows = apply_order(self.repo.list_all(session, kind), ordered_ids)
        self.repo.save_all(session, rows)
        return self.list_facets(session, kind)

    def set_facet_image(
        self,
        session: Session,
        kind: FacetKind,
        facet_id: uuid.UUID,
        content_type: str | None,
        file_bytes: bytes,
    ) -> FacetRead:
        """
        Optimize + upload a tile image and replace the previous one.
        """
        if kind not in IMAGE_FACETS:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"{kind.value} does not support images",
            )
        row = self._get(session, kind, facet_id)

        new_url = optimize_and_store(f"facets/{kind.value}", content_type, file_bytes)
        old_url = row.image_url
        row.image_url = new_url
        updated = self.repo.update(session, row)

        # Best-effort cleanup of previous image
        delete_public_url(old_url)
        return to_read(kind, updated)
