# admin_api/routers/users.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from admin_api.core.auth import require_admin
from admin_api.database import get_session
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.support_repo import SupportRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.user import UserCreate, UserRead, UserUpdate
from admin_api.services.user_service import UserService

router = APIRouter(
    prefix="/admin/users",
    tags=["Users"],
    dependencies=[Depends(require_admin)],
)

service = UserService(UserRepository(), ProductRepository(), SupportRepository())


@router.get("", response_model=list[UserRead])
def list_users(session: Session = Depends(get_session)):
    """
    List all members with their product counts, newest first.
    """
    return service.list_users(session)


@router.get("/{user_id}", response_model=UserRead)
def get_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    return service.read_user(session, user_id)


@router.post("", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: UserCreate,
    session: Session = Depends(get_session),
):
    """
    Create a member profile. Phone numbers must be unique (409 otherwise).
    """
    return service.create_user(session, payload)


@router.patch("/{user_id}", response_model=UserRead)
def update_user(
    user_id: uuid.UUID,
    payload: UserUpdate,
    session: Session = Depends(get_session),
):
    return service.update_user(session, user_id, payload)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    """
    Delete a member together with their products and related reports.
    """
    service.delete_user(session, user_id)
    return None
