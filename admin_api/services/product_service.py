# admin_api/services/product_service.py
import logging
import uuid
from typing import Iterable

from fastapi import HTTPException, status
from sqlmodel import Session

from admin_api.core.storage_utils import delete_public_url
from admin_api.models.facet import FacetKind
from admin_api.models.product import Product
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.facet import FacetIds, ProductFacets
from admin_api.schemas.product import (
    AdminProductRow,
    ImageOrderUpdate,
    ProductCreate,
    ProductFilterParams,
    ProductRead,
    ProductStatusUpdate,
    ProductUpdate,
)
from admin_api.services.facet_aggregator import aggregate_facets
from admin_api.services.facet_service import FacetService
from admin_api.services.image_upload import optimize_upload, store_image
from admin_api.services.product_filters import apply_pipeline

logger = logging.getLogger("uvicorn")

MAX_IMAGES_PER_PRODUCT = 10


class ProductService:
    """
    Business logic for products.

    Responsibilities:
      - admin product table: join owners + aggregated facets, then run the
        filter/sort pipeline
      - create / update with facet links per dimension
      - moderation (status <-> is_active) and listing status
      - gallery management: optimized uploads, delete, primary, reorder
    """

    def __init__(
        self,
        repo: ProductRepository,
        user_repo: UserRepository,
        facet_repo: FacetRepository,
    ):
        self.repo = repo
        self.user_repo = user_repo
        self.facet_service = FacetService(facet_repo)

    # ----- Helpers -----

    def _get(self, session: Session, product_id: uuid.UUID) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def _ensure_owner(self, session: Session, owner_user_id: uuid.UUID) -> None:
        if self.user_repo.get_by_id(session, owner_user_id) is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Owner user does not exist",
            )

    def _facets_for(
        self,
        session: Session,
        product_ids: list[uuid.UUID],
        names: dict[FacetKind, dict[uuid.UUID, str]],
    ) -> dict[uuid.UUID, ProductFacets]:
        associations = {
            kind: self.repo.list_links(session, kind, product_ids) for kind in FacetKind
        }
        return aggregate_facets(product_ids, associations, names)

    def _replace_links(self, session: Session, product_id: uuid.UUID, facets: FacetIds) -> None:
        for kind in FacetKind:
            self.repo.replace_links(session, product_id, kind, facets.ids(kind))

    def _validate_facets(self, session: Session, facets: FacetIds) -> None:
        for kind in FacetKind:
            self.facet_service.ensure_exist(session, kind, facets.ids(kind))

    def _read(self, session: Session, product: Product) -> ProductRead:
        names = self.facet_service.name_tables(session)
        facets = self._facets_for(session, [product.id], names)[product.id]
        return ProductRead.model_validate(
            {**product.model_dump(), "facets": facets},
        )

    # ----- Admin table -----

    def list_admin_rows(
        self,
        session: Session,
        params: ProductFilterParams,
    ) -> list[AdminProductRow]:
        """
        Every product as a table row, filtered and sorted per `params`.
        """
        products = self.repo.list_all(session)
        product_ids = [p.id for p in products]

        owners = {
            u.id: u
            for u in self.user_repo.list_by_ids(session, {p.owner_user_id for p in products})
        }
        names = self.facet_service.name_tables(session)
        facets = self._facets_for(session, product_ids, names)

        rows: list[AdminProductRow] = []
        for p in products:
            owner = owners.get(p.owner_user_id)
            rows.append(
                AdminProductRow(
                    id=p.id,
                    product_code=p.product_code,
                    owner_user_id=p.owner_user_id,
                    owner_name=owner.name if owner else None,
                    owner_phone=owner.phone if owner else None,
                    name=p.title,
                    price=p.price,
                    original_price=p.original_price,
                    status=p.status,
                    is_active=p.is_active,
                    listing_status=p.listing_status,
                    primary_image=p.primary_image(),
                    image_count=len(p.images),
                    created_at=p.created_at,
                    facets=facets[p.id],
                )
            )

        # Filter refs arrive as strings from the query string
        lookup = {
            kind: {str(fid): name for fid, name in table.items()}
            for kind, table in names.items()
        }
        return apply_pipeline(rows, lookup, params)

    # ----- CRUD -----

    def get_product(self, session: Session, product_id: uuid.UUID) -> ProductRead:
        return self._read(session, self._get(session, product_id))

    def create_product(self, session: Session, payload: ProductCreate) -> ProductRead:
        """
        Create a product and its facet links in one commit.
        """
        self._ensure_owner(session, payload.owner_user_id)
        self._validate_facets(session, payload.facets)

        product = Product(
            owner_user_id=payload.owner_user_id,
            title=payload.title,
            product_code=payload.product_code,
            description=payload.description,
            price=payload.price,
            original_price=payload.original_price,
            status=payload.status,
            is_active=payload.status == "approved",
            listing_status=payload.listing_status,
            admin_note=payload.admin_note,
        )
        session.add(product)
        self._replace_links(session, product.id, payload.facets)
        self.repo.commit(session)
        session.refresh(product)

        logger.info(f"Product created: {product.id} ({product.title})")
        return self._read(session, product)

    def update_product(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductUpdate,
    ) -> ProductRead:
        """
        Partial update. Given `facets` replace all links of every dimension.
        """
        product = self._get(session, product_id)
        values = payload.model_dump(exclude_unset=True, exclude={"facets"})

        if values.get("owner_user_id") is not None:
            self._ensure_owner(session, values["owner_user_id"])

        for attr, value in values.items():
            if attr in ("owner_user_id", "title", "price") and value is None:
                continue
            setattr(product, attr, value)

        if payload.facets is not None:
            self._validate_facets(session, payload.facets)
            self._replace_links(session, product.id, payload.facets)

        return self._read(session, self.repo.update(session, product))

    def delete_product(self, session: Session, product_id: uuid.UUID) -> None:
        """
        Delete a product, its facet links, its reports, then its images.
        """
        product = self._get(session, product_id)
        images = list(product.images)
        self.repo.delete(session, product)

        for url in images:
            delete_public_url(url)
        logger.info(f"Product deleted: {product_id}")

    # ----- Moderation -----

    def set_status(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ProductStatusUpdate,
    ) -> ProductRead:
        """
        Approve / reject / draft a product. Only approved products are active.
        """
        product = self._get(session, product_id)
        product.status = payload.status
        product.is_active = payload.status == "approved"
        if payload.admin_note is not None:
            product.admin_note = payload.admin_note
        return self._read(session, self.repo.update(session, product))

    def set_listing_status(
        self,
        session: Session,
        product_id: uuid.UUID,
        listing_status: str,
    ) -> ProductRead:
        product = self._get(session, product_id)
        product.listing_status = listing_status
        return self._read(session, self.repo.update(session, product))

    # ----- Gallery -----

    def add_images(
        self,
        session: Session,
        product_id: uuid.UUID,
        files: Iterable[tuple[str | None, bytes]],
    ) -> ProductRead:
        """
        Optimize and upload one or more images, appended to the gallery.

        Every file is decoded and re-encoded before anything is uploaded, so
        one unreadable file aborts the request with nothing stored. If an
        upload fails midway, objects already uploaded are removed again.
        """
        product = self._get(session, product_id)
        files = list(files)

        if len(product.images) + len(files) > MAX_IMAGES_PER_PRODUCT:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"A product can have at most {MAX_IMAGES_PER_PRODUCT} images",
            )

        optimized = [optimize_upload(content_type, data) for content_type, data in files]

        uploaded: list[str] = []
        try:
            for image in optimized:
                uploaded.append(store_image(f"products/{product.id}", image))
        except HTTPException:
            for url in uploaded:
                delete_public_url(url)
            raise

        product.images = [*product.images, *uploaded]
        return self._read(session, self.repo.update(session, product))

    def remove_image(self, session: Session, product_id: uuid.UUID, index: int) -> ProductRead:
        """
        Remove the image at `index`. The primary image keeps pointing at the
        same picture when possible, else falls back to the first one.
        """
        product = self._get(session, product_id)
        if not 0 <= index < len(product.images):
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Image not found for this product",
            )

        images = list(product.images)
        removed = images.pop(index)

        primary = product.primary_image_index
        if index == primary:
            primary = 0
        elif index < primary:
            primary -= 1

        product.images = images
        product.primary_image_index = primary if images else 0
        updated = self.repo.update(session, product)

        # Best-effort Storage cleanup
        delete_public_url(removed)
        return self._read(session, updated)

    def set_primary_image(self, session: Session, product_id: uuid.UUID, index: int) -> ProductRead:
        product = self._get(session, product_id)
        if not 0 <= index < len(product.images):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Primary image index out of range",
            )
        product.primary_image_index = index
        return self._read(session, self.repo.update(session, product))

    def reorder_images(
        self,
        session: Session,
        product_id: uuid.UUID,
        payload: ImageOrderUpdate,
    ) -> ProductRead:
        """
        Reorder the gallery. `order[i]` is the old position of the image that
        ends up at position i; the primary image follows its picture.
        """
        product = self._get(session, product_id)
        if sorted(payload.order) != list(range(len(product.images))):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="order must be a permutation of the current image positions",
            )

        old_primary = product.primary_image_index
        product.images = [product.images[i] for i in payload.order]
        if old_primary in payload.order:
            product.primary_image_index = payload.order.index(old_primary)
        else:
            product.primary_image_index = 0
        return self._read(session, self.repo.update(session, product))
