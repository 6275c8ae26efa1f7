# admin_api/services/user_service.py
import logging
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from admin_api.core.storage_utils import delete_public_url
from admin_api.models.user import User
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.support_repo import SupportRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.user import UserCreate, UserRead, UserUpdate

logger = logging.getLogger("uvicorn")


class UserService:
    """
    Business logic for marketplace members.

    Responsibilities:
      - phone number uniqueness (checked before writes)
      - member deletion cascading to their products and reports
    """

    def __init__(
        self,
        repo: UserRepository,
        product_repo: ProductRepository,
        support_repo: SupportRepository,
    ):
        self.repo = repo
        self.product_repo = product_repo
        self.support_repo = support_repo

    # ----- Helpers -----

    def _ensure_phone_free(
        self,
        session: Session,
        phone: str,
        exclude_id: uuid.UUID | None = None,
    ) -> None:
        # Read-then-write: the unique index on users.phone still guards races
        existing = self.repo.get_by_phone(session, phone)
        if existing is not None and existing.id != exclude_id:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Phone number already registered",
            )

    @staticmethod
    def _to_read(user: User, product_count: int = 0) -> UserRead:
        return UserRead.model_validate(
            {**user.model_dump(), "product_count": product_count},
        )

    # ----- Queries -----

    def list_users(self, session: Session) -> list[UserRead]:
        """All members, newest first, with their product counts."""
        counts = self.repo.product_counts(session)
        return [self._to_read(u, counts.get(u.id, 0)) for u in self.repo.list_all(session)]

    def get_user(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Raises:
            HTTPException(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )
        return user

    def read_user(self, session: Session, user_id: uuid.UUID) -> UserRead:
        user = self.get_user(session, user_id)
        return self._to_read(user, self.repo.product_counts(session).get(user.id, 0))

    # ----- Mutations -----

    def create_user(self, session: Session, payload: UserCreate) -> UserRead:
        self._ensure_phone_free(session, payload.phone)
        user = User(name=payload.name, phone=payload.phone, email=payload.email)
        return self._to_read(self.repo.create(session, user))

    def update_user(
        self,
        session: Session,
        user_id: uuid.UUID,
        payload: UserUpdate,
    ) -> UserRead:
        user = self.get_user(session, user_id)

        if payload.name is not None:
            user.name = payload.name

        if payload.phone is not None and payload.phone != user.phone:
            self._ensure_phone_free(session, payload.phone, exclude_id=user.id)
            user.phone = payload.phone

        if "email" in payload.model_fields_set:
            user.email = payload.email

        user = self.repo.update(session, user)
        return self._to_read(user, self.repo.product_counts(session).get(user.id, 0))

    def delete_user(self, session: Session, user_id: uuid.UUID) -> None:
        """
        Delete a member with their products (and those products' images)
        and every report filed by or against them.
        """
        user = self.get_user(session, user_id)

        image_urls: list[str] = []
        for product in self.product_repo.list_all(session, owner_user_id=user.id):
            image_urls.extend(product.images)
            self.product_repo.delete(session, product)

        self.support_repo.delete_reports_for_user(session, user.id)
        self.repo.delete(session, user)

        for url in image_urls:
            delete_public_url(url)
        logger.info(f"User deleted: {user_id}")
