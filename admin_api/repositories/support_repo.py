# admin_api/repositories/support_repo.py
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, func, or_
from sqlmodel import Session, select

from admin_api.models.support import ContactRequest, Report, WebsiteSetting


class SupportRepository:
    """
    Data access layer for contact requests, reports and website settings.
    """

    # ----- Contact requests -----

    def get_contact(self, session: Session, request_id: uuid.UUID) -> ContactRequest | None:
        return session.get(ContactRequest, request_id)

    def list_contacts(self, session: Session, status: str | None = None) -> list[ContactRequest]:
        stmt = select(ContactRequest)
        if status is not None:
            stmt = stmt.where(ContactRequest.status == status)
        stmt = stmt.order_by(ContactRequest.created_at.desc())
        return list(session.exec(stmt).all())

    def count_contacts(self, session: Session, status: str | None = None) -> int:
        stmt = select(func.count()).select_from(ContactRequest)
        if status is not None:
            stmt = stmt.where(ContactRequest.status == status)
        return int(session.exec(stmt).one() or 0)

    # ----- Reports -----

    def get_report(self, session: Session, report_id: uuid.UUID) -> Report | None:
        return session.get(Report, report_id)

    def list_reports(self, session: Session, status: str | None = None) -> list[Report]:
        stmt = select(Report)
        if status is not None:
            stmt = stmt.where(Report.status == status)
        stmt = stmt.order_by(Report.created_at.desc())
        return list(session.exec(stmt).all())

    def count_reports(self, session: Session, status: str | None = None) -> int:
        stmt = select(func.count()).select_from(Report)
        if status is not None:
            stmt = stmt.where(Report.status == status)
        return int(session.exec(stmt).one() or 0)

    def delete_reports_for_user(self, session: Session, user_id: uuid.UUID) -> None:
        """Drop reports filed by or against a member. Caller commits."""
        stmt = delete(Report).where(
            or_(Report.reporter_user_id == user_id, Report.reported_user_id == user_id)
        )
        session.exec(stmt)

    # ----- Website settings -----

    def get_setting(self, session: Session, key: str) -> WebsiteSetting | None:
        return session.get(WebsiteSetting, key)

    def upsert_setting(self, session: Session, key: str, value: str) -> WebsiteSetting:
        setting = session.get(WebsiteSetting, key)
        if setting is None:
            setting = WebsiteSetting(key=key, value=value)
        else:
            setting.value = value
            setting.updated_at = datetime.now(timezone.utc)
        session.add(setting)
        session.commit()
        session.refresh(setting)
        return setting

    # ----- Shared writes -----

    def save(self, session: Session, row: ContactRequest | Report) -> ContactRequest | Report:
        session.add(row)
        session.commit()
        session.refresh(row)
        return row

    def delete(self, session: Session, row: ContactRequest | Report) -> None:
        session.delete(row)
        session.commit()
