# admin_api/schemas/support.py
import uuid
from datetime import datetime
from typing import Literal

from pydantic import ConfigDict
from sqlmodel import SQLModel

ContactStatus = Literal["new", "in_progress", "resolved"]
ReportStatus = Literal["new", "reviewed", "resolved", "dismissed"]


class ContactRequestRead(SQLModel):
    id: uuid.UUID
    name: str
    email: str | None
    phone: str | None
    message: str
    status: ContactStatus
    created_at: datetime


class ContactStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")
    status: ContactStatus


class ReportRead(SQLModel):
    id: uuid.UUID
    reporter_user_id: uuid.UUID | None
    reported_user_id: uuid.UUID | None
    product_id: uuid.UUID | None
    reason: str
    details: str | None
    status: ReportStatus
    created_at: datetime
    reporter_name: str | None = None
    reported_name: str | None = None


class ReportStatusUpdate(SQLModel):
    model_config = ConfigDict(extra="forbid")
    status: ReportStatus


class WebsiteEnabled(SQLModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool


class DashboardSummary(SQLModel):
    """
    Counts shown on the dashboard landing tab.

    Each section loads independently; a section that failed is None and its
    name is listed in `errors`.
    """

    users: int | None = None
    products: int | None = None
    pending_products: int | None = None
    facets: dict[str, int] | None = None
    categories: int | None = None
    hero_slides: int | None = None
    new_contact_requests: int | None = None
    new_reports: int | None = None
    website_enabled: bool | None = None
    errors: list[str] = []
