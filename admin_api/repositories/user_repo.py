# admin_api/repositories/user_repo.py
import uuid

from sqlalchemy import func
from sqlmodel import Session, select

from admin_api.models.product import Product
from admin_api.models.user import Admin, User


class UserRepository:
    """
    Data access layer for User and Admin.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    # ----- Members -----

    def get_by_id(self, session: Session, user_id: uuid.UUID) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_phone(self, session: Session, phone: str) -> User | None:
        """Return the User owning this phone number, or None."""
        stmt = select(User).where(User.phone == phone)
        return session.exec(stmt).first()

    def list_all(self, session: Session) -> list[User]:
        """All members, newest first."""
        stmt = select(User).order_by(User.created_at.desc())
        return list(session.exec(stmt).all())

    def list_by_ids(self, session: Session, user_ids: set[uuid.UUID]) -> list[User]:
        if not user_ids:
            return []
        stmt = select(User).where(User.id.in_(user_ids))
        return list(session.exec(stmt).all())

    def count(self, session: Session) -> int:
        value = session.exec(select(func.count()).select_from(User)).one()
        return int(value or 0)

    def product_counts(self, session: Session) -> dict[uuid.UUID, int]:
        """owner_user_id -> number of listed products."""
        stmt = (
            select(Product.owner_user_id, func.count(Product.id))
            .group_by(Product.owner_user_id)
        )
        return {owner_id: int(n) for owner_id, n in session.exec(stmt).all()}

    def create(self, session: Session, user: User) -> User:
        """Insert a new User and return the persisted row."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def update(self, session: Session, user: User) -> User:
        """Persist changes to an existing User."""
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """Delete a User."""
        session.delete(user)
        session.commit()

    # ----- Staff -----

    def get_admin_by_auth_id(
        self,
        session: Session,
        auth_user_id: uuid.UUID,
    ) -> Admin | None:
        stmt = select(Admin).where(Admin.auth_user_id == auth_user_id)
        return session.exec(stmt).first()
