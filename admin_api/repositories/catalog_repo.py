# admin_api/repositories/catalog_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from admin_api.models.catalog import Category, HeroSlide


class CatalogRepository:
    """
    Data access layer for categories and hero slides.
    """

    # ----- Categories -----

    def get_category(self, session: Session, category_id: uuid.UUID) -> Category | None:
        return session.get(Category, category_id)

    def get_category_by_slug(self, session: Session, slug: str) -> Category | None:
        stmt = select(Category).where(Category.slug == slug)
        return session.exec(stmt).first()

    def list_categories(self, session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.display_order, Category.name)
        return list(session.exec(stmt).all())

    def count_categories(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(Category)).one()
        return int(value or 0)

    def next_category_order(self, session: Session) -> int:
        highest = session.exec(select(func.max(Category.display_order))).one()
        return 0 if highest is None else highest + 1

    # ----- Hero slides -----

    def get_slide(self, session: Session, slide_id: uuid.UUID) -> HeroSlide | None:
        return session.get(HeroSlide, slide_id)

    def list_slides(self, session: Session, only_active: bool = False) -> list[HeroSlide]:
        stmt = select(HeroSlide)
        if only_active:
            stmt = stmt.where(HeroSlide.is_active == True)  # noqa: E712
        stmt = stmt.order_by(HeroSlide.display_order, HeroSlide.created_at)
        return list(session.exec(stmt).all())

    def count_slides(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(HeroSlide)).one()
        return int(value or 0)

    def next_slide_order(self, session: Session) -> int:
        highest = session.exec(select(func.max(HeroSlide.display_order))).one()
        return 0 if highest is None else highest + 1

    # ----- Shared writes -----

    def save(self, session: Session, row: Category | HeroSlide) -> Category | HeroSlide:
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def save_all(self, session: Session, rows: list[Category] | list[HeroSlide]) -> None:
        for row in rows:
            session.add(row)
        session.commit()

    def delete(self, session: Session, row: Category | HeroSlide) -> None:
        session.delete(row)
        session.commit()
