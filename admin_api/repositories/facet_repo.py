# admin_api/repositories/facet_repo.py
import uuid

from sqlalchemy import delete, func
from sqlmodel import Session, SQLModel, select

from admin_api.models.facet import FACET_LINKS, FACET_MODELS, FacetKind


class FacetRepository:
    """
    Data access for the five facet tables.

    Every method takes the FacetKind and dispatches to the matching model,
    so one repository serves types, occasions, colors, materials and cities.
    """

    def get_by_id(self, session: Session, kind: FacetKind, facet_id: uuid.UUID) -> SQLModel | None:
        return session.get(FACET_MODELS[kind], facet_id)

    def list_all(self, session: Session, kind: FacetKind) -> list[SQLModel]:
        """Facets of one kind by display_order, then name."""
        model = FACET_MODELS[kind]
        stmt = select(model).order_by(model.display_order, model.name)
        return list(session.exec(stmt).all())

    def list_by_ids(
        self,
        session: Session,
        kind: FacetKind,
        facet_ids: list[uuid.UUID],
    ) -> list[SQLModel]:
        if not facet_ids:
            return []
        model = FACET_MODELS[kind]
        return list(session.exec(select(model).where(model.id.in_(facet_ids))).all())

    def name_table(self, session: Session, kind: FacetKind) -> dict[uuid.UUID, str]:
        """facet id -> display name for one kind."""
        model = FACET_MODELS[kind]
        return {fid: name for fid, name in session.exec(select(model.id, model.name)).all()}

    def count(self, session: Session, kind: FacetKind) -> int:
        value = session.exec(select(func.count()).select_from(FACET_MODELS[kind])).one()
        return int(value or 0)

    def next_display_order(self, session: Session, kind: FacetKind) -> int:
        """One past the highest display_order of this kind, 0 for an empty table."""
        model = FACET_MODELS[kind]
        highest = session.exec(select(func.max(model.display_order))).one()
        return 0 if highest is None else highest + 1

    def create(self, session: Session, facet: SQLModel) -> SQLModel:
        session.add(facet)
        session.commit()
        session.refresh(facet)
        return facet

    def update(self, session: Session, facet: SQLModel) -> SQLModel:
        session.add(facet)
        session.commit()
        session.refresh(facet)
        return facet

    def save_all(self, session: Session, facets: list[SQLModel]) -> None:
        for facet in facets:
            session.add(facet)
        session.commit()

    def delete(self, session: Session, kind: FacetKind, facet: SQLModel) -> None:
        """Delete a facet and every product link pointing at it."""
        link_model, column = FACET_LINKS[kind]
        session.exec(delete(link_model).where(getattr(link_model, column) == facet.id))
        session.delete(facet)
        session.commit()
