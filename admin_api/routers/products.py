# admin_api/routers/products.py
import uuid
from typing import Annotated

from fastapi import (
    APIRouter,
    Depends,
    File,
    HTTPException,
    Query,
    UploadFile,
    status,
)
from sqlmodel import Session

from admin_api.core.auth import require_admin
from admin_api.database import get_session
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.product import (
    AdminProductRow,
    ImageOrderUpdate,
    ListingStatusUpdate,
    PrimaryImageUpdate,
    ProductCreate,
    ProductFilterParams,
    ProductRead,
    ProductStatusUpdate,
    ProductUpdate,
    SortLinkParams,
)
from admin_api.services.product_filters import toggle_sort
from admin_api.services.product_service import ProductService

router = APIRouter(
    prefix="/admin/products",
    tags=["Products"],
    dependencies=[Depends(require_admin)],
)

service = ProductService(ProductRepository(), UserRepository(), FacetRepository())


@router.get("", response_model=list[AdminProductRow])
def list_products(
    params: Annotated[ProductFilterParams, Query()],
    session: Session = Depends(get_session),
):
    """
    Product table for the admin console.

    Query params (all optional):
      - owner: user id or "all"
      - facet: "<kind>:<id>", bare facet id, or "all"
      - q: free text over name, ids, facet names, owner name/phone
      - name / owner_text / facet_text / product_id / price: column filters
      - sort_by: name | type | category | product_id | price | created_at
      - sort_dir: asc | desc
    """
    return service.list_admin_rows(session, params)


@router.get("/sort-link")
def sort_link(
    params: Annotated[SortLinkParams, Query()],
) -> dict:
    """
    Filter state after clicking a column header, plus its query string so
    the frontend can push it to the URL.
    """
    current = ProductFilterParams.model_validate(params.model_dump(exclude={"column"}))
    toggled = toggle_sort(current, params.column)
    return {
        "params": toggled.model_dump(mode="json"),
        "query_string": toggled.to_query_string(),
    }


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.get_product(session, product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
)
def create_product(
    payload: ProductCreate,
    session: Session = Depends(get_session),
):
    """
    Create a product on behalf of a member, with its facet links.
    """
    return service.create_product(session, payload)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: uuid.UUID,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    return service.update_product(session, product_id, payload)


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a product, its facet links, reports and images.
    """
    service.delete_product(session, product_id)
    return None


@router.patch("/{product_id}/status", response_model=ProductRead)
def update_status(
    product_id: uuid.UUID,
    payload: ProductStatusUpdate,
    session: Session = Depends(get_session),
):
    """
    Approve / reject / draft. Approved products become active.
    """
    return service.set_status(session, product_id, payload)


@router.patch("/{product_id}/listing-status", response_model=ProductRead)
def update_listing_status(
    product_id: uuid.UUID,
    payload: ListingStatusUpdate,
    session: Session = Depends(get_session),
):
    return service.set_listing_status(session, product_id, payload.listing_status)


@router.post(
    "/{product_id}/images",
    response_model=ProductRead,
    summary="Upload one or more images for a product",
)
def upload_images(
    product_id: uuid.UUID,
    files: list[UploadFile] = File(...),
    session: Session = Depends(get_session),
):
    """
    Upload gallery images.

    - Every file is re-encoded to WebP before upload.
    - An unreadable file rejects the whole request; nothing is stored.
    """
    if not files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No files uploaded",
        )

    payload = [(f.content_type, f.file.read()) for f in files]
    return service.add_images(session, product_id, payload)


@router.delete("/{product_id}/images/{index}", response_model=ProductRead)
def delete_image(
    product_id: uuid.UUID,
    index: int,
    session: Session = Depends(get_session),
):
    return service.remove_image(session, product_id, index)


@router.put("/{product_id}/images/primary", response_model=ProductRead)
def set_primary_image(
    product_id: uuid.UUID,
    payload: PrimaryImageUpdate,
    session: Session = Depends(get_session),
):
    return service.set_primary_image(session, product_id, payload.index)


@router.put("/{product_id}/images/order", response_model=ProductRead)
def reorder_images(
    product_id: uuid.UUID,
    payload: ImageOrderUpdate,
    session: Session = Depends(get_session),
):
    return service.reorder_images(session, product_id, payload)
