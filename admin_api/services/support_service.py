# admin_api/services/support_service.py
import uuid

from fastapi import HTTPException, status
from sqlmodel import Session

from admin_api.models.support import ContactRequest, Report
from admin_api.repositories.support_repo import SupportRepository
from admin_api.repositories.user_repo import UserRepository
from admin_api.schemas.support import ReportRead

WEBSITE_ENABLED_KEY = "website_enabled"


class SupportService:
    """
    Contact requests, abuse reports and the public-site switch.
    """

    def __init__(self, repo: SupportRepository, user_repo: UserRepository):
        self.repo = repo
        self.user_repo = user_repo

    # ----- Contact requests -----

    def _get_contact(self, session: Session, request_id: uuid.UUID) -> ContactRequest:
        contact = self.repo.get_contact(session, request_id)
        if not contact:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Contact request not found",
            )
        return contact

    def list_contacts(self, session: Session, status_filter: str | None = None) -> list[ContactRequest]:
        return self.repo.list_contacts(session, status=status_filter)

    def set_contact_status(self, session: Session, request_id: uuid.UUID, new_status: str) -> ContactRequest:
        contact = self._get_contact(session, request_id)
        contact.status = new_status
        return self.repo.save(session, contact)

    def delete_contact(self, session: Session, request_id: uuid.UUID) -> None:
        self.repo.delete(session, self._get_contact(session, request_id))

    # ----- Reports -----

    def _get_report(self, session: Session, report_id: uuid.UUID) -> Report:
        report = self.repo.get_report(session, report_id)
        if not report:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Report not found",
            )
        return report

    def _with_names(self, session: Session, reports: list[Report]) -> list[ReportRead]:
        """Attach reporter / reported member names for the table."""
        user_ids = {
            uid
            for r in reports
            for uid in (r.reporter_user_id, r.reported_user_id)
            if uid is not None
        }
        names = {u.id: u.name for u in self.user_repo.list_by_ids(session, user_ids)}
        return [
            ReportRead.model_validate(
                {
                    **r.model_dump(),
                    "reporter_name": names.get(r.reporter_user_id),
                    "reported_name": names.get(r.reported_user_id),
                }
            )
            for r in reports
        ]

    def list_reports(self, session: Session, status_filter: str | None = None) -> list[ReportRead]:
        return self._with_names(session, self.repo.list_reports(session, status=status_filter))

    def set_report_status(self, session: Session, report_id: uuid.UUID, new_status: str) -> ReportRead:
        report = self._get_report(session, report_id)
        report.status = new_status
        return self._with_names(session, [self.repo.save(session, report)])[0]

    def delete_report(self, session: Session, report_id: uuid.UUID) -> None:
        self.repo.delete(session, self._get_report(session, report_id))

    # ----- Website settings -----

    def is_website_enabled(self, session: Session) -> bool:
        """
        Public site switch. A missing row means the site was never turned
        off, so it defaults to enabled.
        """
        setting = self.repo.get_setting(session, WEBSITE_ENABLED_KEY)
        if setting is None:
            return True
        return setting.value.strip().lower() in {"1", "true", "yes", "y"}

    def set_website_enabled(self, session: Session, enabled: bool) -> bool:
        setting = self.repo.upsert_setting(
            session,
            WEBSITE_ENABLED_KEY,
            "true" if enabled else "false",
        )
        return setting.value == "true"
