# admin_api/services/catalog_service.py
import re
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from admin_api.core.storage_utils import delete_public_url
from admin_api.models.catalog import Category, HeroSlide
from admin_api.repositories.catalog_repo import CatalogRepository
from admin_api.schemas.catalog import (
    CategoryCreate,
    CategoryUpdate,
    HeroSlideCreate,
    HeroSlideUpdate,
)
from admin_api.services.image_upload import optimize_and_store
from admin_api.services.ordering import apply_order


class CatalogService:
    """
    Business logic for categories and homepage hero slides.

    Responsibilities:
      - slug generation & uniqueness for categories
      - display_order maintenance (append on create, drag-and-drop reorder)
      - image upload through the WebP optimizer, with Storage cleanup
    """

    def __init__(self, repo: CatalogRepository):
        self.repo = repo

    # ----- Helpers -----

    @staticmethod
    def _slugify(raw: str) -> str:
        """
        Basic slugification:
          - lowercase
          - non-alphanumeric -> '-'
          - collapse multiple '-'
          - strip leading/trailing '-'
        """
        value = raw.strip().lower()
        value = re.sub(r"[^a-z0-9]+", "-", value)
        value = re.sub(r"-+", "-", value)
        value = value.strip("-")
        return value or "category"

    def _ensure_unique_slug(self, session: Session, base_slug: str) -> str:
        """
        Ensure slug is unique by appending -2, -3, ... if needed.
        """
        slug = base_slug
        i = 2
        while self.repo.get_category_by_slug(session, slug) is not None:
            slug = f"{base_slug}-{i}"
            i += 1
        return slug

    def _get_category(self, session: Session, category_id: uuid.UUID) -> Category:
        category = self.repo.get_category(session, category_id)
        if not category:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Category not found",
            )
        return category

    def _get_slide(self, session: Session, slide_id: uuid.UUID) -> HeroSlide:
        slide = self.repo.get_slide(session, slide_id)
        if not slide:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Hero slide not found",
            )
        return slide

    # ----- Categories -----

    def list_categories(self, session: Session) -> list[Category]:
        return self.repo.list_categories(session)

    def create_category(self, session: Session, payload: CategoryCreate) -> Category:
        slug = self._ensure_unique_slug(session, self._slugify(payload.slug or payload.name))
        category = Category(
            name=payload.name,
            slug=slug,
            image_url=payload.image_url,
            display_order=self.repo.next_category_order(session),
        )
        return self.repo.save(session, category)

    def update_category(
        self,
        session: Session,
        category_id: uuid.UUID,
        payload: CategoryUpdate,
    ) -> Category:
        """
        Partial update of a category.

        - If slug is changed, enforce uniqueness.
        """
        category = self._get_category(session, category_id)

        if payload.name is not None:
            category.name = payload.name

        if payload.slug is not None:
            new_base_slug = self._slugify(payload.slug)
            if new_base_slug != category.slug:
                category.slug = self._ensure_unique_slug(session, new_base_slug)

        if payload.image_url is not None:
            category.image_url = payload.image_url

        return self.repo.save(session, category)

    def delete_category(self, session: Session, category_id: uuid.UUID) -> None:
        category = self._get_category(session, category_id)
        image_url = category.image_url
        self.repo.delete(session, category)
        delete_public_url(image_url)

    def reorder_categories(self, session: Session, ordered_ids: list[uuid.UUID]) -> list[Category]:
        rows = apply_order(self.repo.list_categories(session), ordered_ids)
        self.repo.save_all(session, rows)
        return self.repo.list_categories(session)

    def set_category_image(
        self,
        session: Session,
        category_id: uuid.UUID,
        content_type: str | None,
        file_bytes: bytes,
    ) -> Category:
        category = self._get_category(session, category_id)
        new_url = optimize_and_store("categories", content_type, file_bytes)
        old_url = category.image_url
        category.image_url = new_url
        updated = self.repo.save(session, category)
        delete_public_url(old_url)
        return updated

    # ----- Hero slides -----

    def list_slides(self, session: Session, only_active: bool = False) -> list[HeroSlide]:
        return self.repo.list_slides(session, only_active=only_active)

    def create_slide(self, session: Session, payload: HeroSlideCreate) -> HeroSlide:
        slide = HeroSlide(
            title=payload.title,
            image_url=payload.image_url,
            link_url=payload.link_url,
            is_active=payload.is_active,
            display_order=self.repo.next_slide_order(session),
        )
        return self.repo.save(session, slide)

    def upload_slide(
        self,
        session: Session,
        content_type: str | None,
        file_bytes: bytes,
        title: str | None = None,
        link_url: str | None = None,
    ) -> HeroSlide:
        """
        Create a slide from an uploaded banner image (optimized to WebP).
        """
        image_url = optimize_and_store("hero", content_type, file_bytes)
        return self.create_slide(
            session,
            HeroSlideCreate(title=title, image_url=image_url, link_url=link_url),
        )

    def update_slide(
        self,
        session: Session,
        slide_id: uuid.UUID,
        payload: HeroSlideUpdate,
    ) -> HeroSlide:
        slide = self._get_slide(session, slide_id)
        for attr, value in payload.model_dump(exclude_unset=True).items():
            if attr == "is_active" and value is None:
                continue
            setattr(slide, attr, value)
        return self.repo.save(session, slide)

    def replace_slide_image(
        self,
        session: Session,
        slide_id: uuid.UUID,
        content_type: str | None,
        file_bytes: bytes,
    ) -> HeroSlide:
        slide = self._get_slide(session, slide_id)
        new_url = optimize_and_store("hero", content_type, file_bytes)
        old_url = slide.image_url
        slide.image_url = new_url
        updated = self.repo.save(session, slide)
        delete_public_url(old_url)
        return updated

    def delete_slide(self, session: Session, slide_id: uuid.UUID) -> None:
        slide = self._get_slide(session, slide_id)
        image_url = slide.image_url
        self.repo.delete(session, slide)
        delete_public_url(image_url)

    def reorder_slides(self, session: Session, ordered_ids: list[uuid.UUID]) -> list[HeroSlide]:
        rows = apply_order(self.repo.list_slides(session), ordered_ids)
        self.repo.save_all(session, rows)
        return self.repo.list_slides(session)
