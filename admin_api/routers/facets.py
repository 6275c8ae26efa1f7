# admin_api/routers/facets.py
import uuid

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlmodel import Session

from admin_api.core.auth import require_admin
from admin_api.database import get_session
from admin_api.models.facet import FacetKind
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.schemas.facet import FacetCreate, FacetRead, FacetUpdate, ReorderPayload
from admin_api.services.facet_service import FacetService

router = APIRouter(
    prefix="/admin/facets",
    tags=["Facets"],
    dependencies=[Depends(require_admin)],
)

service = FacetService(FacetRepository())


@router.get("/{kind}", response_model=list[FacetRead])
def list_facets(
    kind: FacetKind,
    session: Session = Depends(get_session),
):
    """
    Facets of one kind in display order.

    kind: product_type | occasion | color | material | city
    """
    return service.list_facets(session, kind)


@router.post("/{kind}", response_model=FacetRead, status_code=status.HTTP_201_CREATED)
def create_facet(
    kind: FacetKind,
    payload: FacetCreate,
    session: Session = Depends(get_session),
):
    """
    Create a facet at the end of the display order.

    - hex_code only for colors, state only for cities,
      image_url only for product types and occasions.
    """
    return service.create_facet(session, kind, payload)


@router.put("/{kind}/order", response_model=list[FacetRead])
def reorder_facets(
    kind: FacetKind,
    payload: ReorderPayload,
    session: Session = Depends(get_session),
):
    """
    Save a drag-and-drop order. `ids` must list every facet of the kind.
    """
    return service.reorder_facets(session, kind, payload.ids)


@router.patch("/{kind}/{facet_id}", response_model=FacetRead)
def update_facet(
    kind: FacetKind,
    facet_id: uuid.UUID,
    payload: FacetUpdate,
    session: Session = Depends(get_session),
):
    return service.update_facet(session, kind, facet_id, payload)


@router.delete("/{kind}/{facet_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_facet(
    kind: FacetKind,
    facet_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a facet and unlink it from every product.
    """
    service.delete_facet(session, kind, facet_id)
    return None


@router.post("/{kind}/{facet_id}/image", response_model=FacetRead)
def upload_facet_image(
    kind: FacetKind,
    facet_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload or replace the tile image of a product type / occasion.
    """
    return service.set_facet_image(
        session=session,
        kind=kind,
        facet_id=facet_id,
        content_type=file.content_type,
        file_bytes=file.file.read(),
    )
