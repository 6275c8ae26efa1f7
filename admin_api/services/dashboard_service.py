# admin_api/services/dashboard_service.py
import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from admin_api.models.facet import FacetKind
from admin_api.repositories.catalog_repo import CatalogRepository
from admin_api.repositories.facet_repo import FacetRepository
from admin_api.repositories.product_repo import ProductRepository
from admin_api.repositories.support_repo import SupportRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.support import DashboardSummary
from admin_api.services.support_service import SupportService

logger = logging.getLogger("uvicorn")


class DashboardService:
    """
    Landing-tab counts.

    Sections are independent: one failing query is logged, rolled back and
    listed in `errors`; the remaining sections still load.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        product_repo: ProductRepository,
        facet_repo: FacetRepository,
        catalog_repo: CatalogRepository,
        support_repo: SupportRepository,
    ):
        self.user_repo = user_repo
        self.product_repo = product_repo
        self.facet_repo = facet_repo
        self.catalog_repo = catalog_repo
        self.support_service = SupportService(support_repo, user_repo)

    def _sections(self) -> dict[str, Callable[[Session], Any]]:
        support_repo = self.support_service.repo
        return {
            "users": self.user_repo.count,
            "products": self.product_repo.count,
            "pending_products": lambda s: self.product_repo.count(s, status="pending"),
            "facets": lambda s: {
                kind.value: self.facet_repo.count(s, kind) for kind in FacetKind
            },
            "categories": self.catalog_repo.count_categories,
            "hero_slides": self.catalog_repo.count_slides,
            "new_contact_requests": lambda s: support_repo.count_contacts(s, status="new"),
            "new_reports": lambda s: support_repo.count_reports(s, status="new"),
            "website_enabled": self.support_service.is_website_enabled,
        }

    def get_summary(self, session: Session) -> DashboardSummary:
        values: dict[str, Any] = {}
        errors: list[str] = []

        for name, load in self._sections().items():
            try:
                values[name] = load(session)
            except SQLAlchemyError as e:
                logger.error(f"Dashboard section '{name}' failed: {e}")
                session.rollback()
                errors.append(name)

        return DashboardSummary(**values, errors=errors)
