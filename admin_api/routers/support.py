# admin_api/routers/support.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from admin_api.core.auth import require_admin
from admin_api.database import get_session
from admin_api.repositories.catalog_repo import CatalogRepository
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.support_repo import SupportRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.support import (
    ContactRequestRead,
    ContactStatus,
    ContactStatusUpdate,
    DashboardSummary,
    ReportRead,
    ReportStatus,
    ReportStatusUpdate,
    WebsiteEnabled,
)
from admin_api.services.dashboard_service import DashboardService
from admin_api.services.support_service import SupportService

router = APIRouter(
    prefix="/admin",
    tags=["Support"],
    dependencies=[Depends(require_admin)],
)

user_repo = UserRepository()
support_repo = SupportRepository()
service = SupportService(support_repo, user_repo)
dashboard = DashboardService(
    user_repo,
    ProductRepository(),
    FacetRepository(),
    CatalogRepository(),
    support_repo,
)


# -------- Dashboard --------


@router.get("/dashboard", response_model=DashboardSummary)
def get_dashboard(session: Session = Depends(get_session)):
    """
    Counts for the landing tab. Sections that failed to load are listed
    in `errors` and left empty.
    """
    return dashboard.get_summary(session)


# -------- Contact requests --------


@router.get("/contact-requests", response_model=list[ContactRequestRead])
def list_contact_requests(
    status_filter: ContactStatus | None = None,
    session: Session = Depends(get_session),
):
    """
    Contact form submissions, newest first.
    """
    return service.list_contacts(session, status_filter)


@router.patch("/contact-requests/{request_id}", response_model=ContactRequestRead)
def update_contact_request(
    request_id: uuid.UUID,
    payload: ContactStatusUpdate,
    session: Session = Depends(get_session),
):
    return service.set_contact_status(session, request_id, payload.status)


@router.delete("/contact-requests/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_contact_request(
    request_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    service.delete_contact(session, request_id)
    return None


# -------- Reports --------


@router.get("/reports", response_model=list[ReportRead])
def list_reports(
    status_filter: ReportStatus | None = None,
    session: Session = Depends(get_session),
):
    return service.list_reports(session, status_filter)


@router.patch("/reports/{report_id}", response_model=ReportRead)
def update_report(
    report_id: uuid.UUID,
    payload: ReportStatusUpdate,
    session: Session = Depends(get_session),
):
    return service.set_report_status(session, report_id, payload.status)


@router.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_report(
    report_id: uuid.UUID,
    session: Session = Depends(get_session),
):
    service.delete_report(session, report_id)
    return None


# -------- Website settings --------


@router.get("/settings/website-enabled", response_model=WebsiteEnabled)
def get_website_enabled(session: Session = Depends(get_session)):
    """
    Whether the public site is live. Defaults to true when never set.
    """
    return WebsiteEnabled(enabled=service.is_website_enabled(session))


@router.put("/settings/website-enabled", response_model=WebsiteEnabled)
def set_website_enabled(
    payload: WebsiteEnabled,
    session: Session = Depends(get_session),
):
    return WebsiteEnabled(enabled=service.set_website_enabled(session, payload.enabled))
