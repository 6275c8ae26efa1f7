# admin_api/repositories/product_repo.py
import uuid
from collections.abc import Iterable

from sqlalchemy import delete, func
from sqlmodel import Session, select

from admin_api.models.facet import FACET_LINKS, FacetKind
from admin_api.models.product import Product
from admin_api.models.support import Report


class ProductRepository:
    """
    Data access layer for Product and its facet junction rows.

    - Pure DB operations (CRUD + queries).
    - No FastAPI, no business logic.
    """

    # ----- Products -----

    def get_by_id(self, session: Session, product_id: uuid.UUID) -> Product | None:
        return session.get(Product, product_id)

    def list_all(
        self,
        session: Session,
        owner_user_id: uuid.UUID | None = None,
    ) -> list[Product]:
        """Products newest first, optionally for one owner."""
        stmt = select(Product)
        if owner_user_id is not None:
            stmt = stmt.where(Product.owner_user_id == owner_user_id)
        stmt = stmt.order_by(Product.created_at.desc())
        return list(session.exec(stmt).all())

    def count(self, session: Session, status: str | None = None) -> int:
        stmt = select(func.count()).select_from(Product)
        if status is not None:
            stmt = stmt.where(Product.status == status)
        value = session.exec(stmt).one()
        return int(value or 0)

    def create(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def update(self, session: Session, product: Product) -> Product:
        session.add(product)
        session.commit()
        session.refresh(product)
        return product

    def delete(self, session: Session, product: Product) -> None:
        """
        Delete a product together with its facet links and reports.
        """
        for link_model, _ in FACET_LINKS.values():
            session.exec(delete(link_model).where(link_model.product_id == product.id))
        session.exec(delete(Report).where(Report.product_id == product.id))
        session.delete(product)
        session.commit()

    # ----- Facet links -----

    def list_links(
        self,
        session: Session,
        kind: FacetKind,
        product_ids: Iterable[uuid.UUID],
    ) -> list[tuple[uuid.UUID, uuid.UUID]]:
        """
        (product_id, facet_id) rows of one junction table for the given products.
        """
        ids = list(product_ids)
        if not ids:
            return []
        link_model, column = FACET_LINKS[kind]
        facet_col = getattr(link_model, column)
        stmt = select(link_model.product_id, facet_col).where(link_model.product_id.in_(ids))
        return [(pid, fid) for pid, fid in session.exec(stmt).all()]

    def replace_links(
        self,
        session: Session,
        product_id: uuid.UUID,
        kind: FacetKind,
        facet_ids: Iterable[uuid.UUID],
    ) -> None:
        """
        Replace every link of one dimension for a product. Caller commits.
        """
        link_model, column = FACET_LINKS[kind]
        session.exec(delete(link_model).where(link_model.product_id == product_id))
        for facet_id in dict.fromkeys(facet_ids):
            session.add(link_model(product_id=product_id, **{column: facet_id}))

    def commit(self, session: Session) -> None:
        session.commit()
