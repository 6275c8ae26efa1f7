# admin_api/routers/catalog.py
import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlmodel import Session

from admin_api.core.auth import require_admin
from admin_api.database import get_session
from admin_api.repositories.catalog_repo import CatalogRepository
from admin_api.schemas.catalog import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    HeroSlideCreate,
    HeroSlideRead,
    HeroSlideUpdate,
)
from admin_api.schemas.facet import ReorderPayload
from admin_api.services.catalog_service import CatalogService

router = APIRouter(
    prefix="/admin",
    tags=["Catalog"],
    dependencies=[Depends(require_admin)],
)

service = CatalogService(CatalogRepository())


# -------- Categories --------


@router.get("/categories", response_model=list[CategoryRead])
def list_categories(session: Session = Depends(get_session)):
    return service.list_categories(session)


@router.post("/categories", response_model=CategoryRead, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    session: Session = Depends(get_session),
):
    """
    Create a category. Slug is generated from the name when omitted.
    """
    return service.create_category(session, payload)


@router.put("/categories/order", response_model=list[CategoryRead])
def reorder_categories(
    payload: ReorderPayload,
    session: Session = Depends(get_session),
):
    return service.reorder_categories(session, payload.ids)


@router.patch("/categories/{category_id}", response_model=CategoryRead)
def update_category(
    category_id: uuid.UUID,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
):
    return service.update_category(session, category_id, payload)


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    service.delete_category(session, category_id)
    return None


@router.post("/categories/{category_id}/image", response_model=CategoryRead)
def upload_category_image(
    category_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    return service.set_category_image(session, category_id, file.content_type, file.file.read())


# -------- Hero slides --------


@router.get("/hero-slides", response_model=list[HeroSlideRead])
def list_slides(
    only_active: bool = False,
    session: Session = Depends(get_session),
):
    return service.list_slides(session, only_active=only_active)


@router.post("/hero-slides", response_model=HeroSlideRead, status_code=status.HTTP_201_CREATED)
def create_slide(
    payload: HeroSlideCreate,
    session: Session = Depends(get_session),
):
    """
    Create a slide from an image URL already in Storage.
    """
    return service.create_slide(session, payload)


@router.post(
    "/hero-slides/upload",
    response_model=HeroSlideRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a hero slide from an uploaded banner",
)
def upload_slide(
    file: UploadFile = File(...),
    title: str | None = Form(default=None),
    link_url: str | None = Form(default=None),
    session: Session = Depends(get_session),
):
    """
    Upload a banner; it is re-encoded to WebP and appended to the carousel.
    """
    return service.upload_slide(
        session,
        content_type=file.content_type,
        file_bytes=file.file.read(),
        title=title,
        link_url=link_url,
    )


@router.put("/hero-slides/order", response_model=list[HeroSlideRead])
def reorder_slides(
    payload: ReorderPayload,
    session: Session = Depends(get_session),
):
    return service.reorder_slides(session, payload.ids)


@router.patch("/hero-slides/{slide_id}", response_model=HeroSlideRead)
def update_slide(
    slide_id: uuid.UUID,
    payload: HeroSlideUpdate,
    session: Session = Depends(get_session),
):
    """
    Edit title / link, or toggle `is_active`.
    """
    return service.update_slide(session, slide_id, payload)


@router.post("/hero-slides/{slide_id}/image", response_model=HeroSlideRead)
def replace_slide_image(
    slide_id: uuid.UUID,
    file: UploadFile = File(...),
    session: Session = Depends(get_session),
):
    return service.replace_slide_image(session, slide_id, file.content_type, file.file.read())


@router.delete("/hero-slides/{slide_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_slide(
    slide_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    service.delete_slide(session, slide_id)
    return None
