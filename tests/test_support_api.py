import uuid

from sqlalchemy.exc import SQLAlchemyError

from admin_api.models.support import ContactRequest, Report, WebsiteSetting
from admin_api.models.user import User
from tests.helpers import API

ADMIN = f"{API}/admin"


def test_contact_requests(client, auth_headers, session):
    session.add(ContactRequest(name="Nisha", email="nisha@example.com", message="Is this available?"))
    session.add(ContactRequest(name="Ravi", message="Refund?", status="resolved"))
    session.commit()

    everything = client.get(f"{ADMIN}/contact-requests", headers=auth_headers).json()
    fresh = client.get(
        f"{ADMIN}/contact-requests", params={"status_filter": "new"}, headers=auth_headers
    ).json()

    assert len(everything) == 2
    assert [c["name"] for c in fresh] == ["Nisha"]

    url = f"{ADMIN}/contact-requests/{fresh[0]['id']}"
    updated = client.patch(url, json={"status": "in_progress"}, headers=auth_headers)
    assert updated.json()["status"] == "in_progress"
    assert client.patch(url, json={"status": "archived"}, headers=auth_headers).status_code == 422

    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.delete(url, headers=auth_headers).status_code == 404


def test_reports_carry_member_names(client, auth_headers, session, member):
    offender = User(name="Vikram", phone="+91 9123456789")
    session.add(offender)
    session.commit()
    session.add(
        Report(reporter_user_id=member.id, reported_user_id=offender.id, reason="No-show")
    )
    session.commit()

    reports = client.get(f"{ADMIN}/reports", headers=auth_headers).json()

    assert len(reports) == 1
    assert reports[0]["reporter_name"] == "Asha Rao"
    assert reports[0]["reported_name"] == "Vikram"

    url = f"{ADMIN}/reports/{reports[0]['id']}"
    updated = client.patch(url, json={"status": "dismissed"}, headers=auth_headers).json()
    assert updated["status"] == "dismissed"
    assert updated["reported_name"] == "Vikram"

    assert client.get(
        f"{ADMIN}/reports", params={"status_filter": "new"}, headers=auth_headers
    ).json() == []
    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.patch(
        f"{ADMIN}/reports/{uuid.uuid4()}", json={"status": "resolved"}, headers=auth_headers
    ).status_code == 404


def test_website_enabled_defaults_to_true(client, auth_headers):
    url = f"{ADMIN}/settings/website-enabled"

    assert client.get(url, headers=auth_headers).json() == {"enabled": True}

    assert client.put(url, json={"enabled": False}, headers=auth_headers).json() == {"enabled": False}
    assert client.get(url, headers=auth_headers).json() == {"enabled": False}

    assert client.put(url, json={"enabled": True}, headers=auth_headers).json() == {"enabled": True}


def test_website_enabled_reads_legacy_values(client, auth_headers, session):
    session.add(WebsiteSetting(key="website_enabled", value="0"))
    session.commit()

    response = client.get(f"{ADMIN}/settings/website-enabled", headers=auth_headers)

    assert response.json() == {"enabled": False}


def test_dashboard_counts(client, auth_headers, session, member):
    session.add(ContactRequest(name="Nisha", message="Hi"))
    session.commit()
    client.post(
        f"{ADMIN}/products",
        json={"owner_user_id": str(member.id), "title": "Saree", "price": "₹100"},
        headers=auth_headers,
    )
    client.post(f"{ADMIN}/facets/color", json={"name": "Red"}, headers=auth_headers)

    summary = client.get(f"{ADMIN}/dashboard", headers=auth_headers).json()

    assert summary["users"] == 1
    assert summary["products"] == 1
    assert summary["pending_products"] == 1
    assert summary["facets"] == {
        "product_type": 0,
        "occasion": 0,
        "color": 1,
        "material": 0,
        "city": 0,
    }
    assert summary["new_contact_requests"] == 1
    assert summary["new_reports"] == 0
    assert summary["website_enabled"] is True
    assert summary["errors"] == []


def test_dashboard_section_failure_is_isolated(client, auth_headers, monkeypatch):
    from admin_api.routers.support import dashboard

    def broken(session):
        raise SQLAlchemyError("relation does not exist")

    monkeypatch.setattr(dashboard.catalog_repo, "count_categories", broken)

    summary = client.get(f"{ADMIN}/dashboard", headers=auth_headers).json()

    assert summary["errors"] == ["categories"]
    assert summary["categories"] is None
    assert summary["hero_slides"] == 0
    assert summary["users"] == 0
