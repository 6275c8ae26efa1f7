import uuid

from sqlalchemy.exc import SQLAlchemyError

from admin_api.models.support import Report
from tests.helpers import API, gradient_image

USERS = f"{API}/admin/users"


def test_create_and_get_user(client, auth_headers):
    response = client.post(
        USERS,
        json={"name": "  Kavya  ", "phone": "+91  99887 76655", "email": "kavya@example.com"},
        headers=auth_headers,
    )

    assert response.status_code == 201, response.text
    user = response.json()
    assert user["name"] == "Kavya"
    assert user["phone"] == "+91 99887 76655"
    assert user["product_count"] == 0

    fetched = client.get(f"{USERS}/{user['id']}", headers=auth_headers).json()
    assert fetched["email"] == "kavya@example.com"


def test_phone_must_be_unique(client, auth_headers, member):
    response = client.post(
        USERS, json={"name": "Copy", "phone": member.phone}, headers=auth_headers
    )
    assert response.status_code == 409


def test_invalid_phone_and_email(client, auth_headers):
    assert client.post(
        USERS, json={"name": "A", "phone": "call me"}, headers=auth_headers
    ).status_code == 422
    assert client.post(
        USERS, json={"name": "A", "phone": "+91 9000000000", "email": "nope"}, headers=auth_headers
    ).status_code == 422


def test_list_includes_product_counts(client, auth_headers, member):
    for title in ("Saree", "Lehenga"):
        client.post(
            f"{API}/admin/products",
            json={"owner_user_id": str(member.id), "title": title, "price": "₹100"},
            headers=auth_headers,
        )

    users = client.get(USERS, headers=auth_headers).json()

    assert len(users) == 1
    assert users[0]["product_count"] == 2


def test_update_user(client, auth_headers, member):
    other = client.post(
        USERS, json={"name": "Other", "phone": "+91 9000000001"}, headers=auth_headers
    ).json()
    url = f"{USERS}/{member.id}"

    assert client.patch(url, json={"phone": other["phone"]}, headers=auth_headers).status_code == 409

    response = client.patch(url, json={"name": "Asha R", "email": None}, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["name"] == "Asha R"
    assert response.json()["email"] is None
    assert response.json()["phone"] == member.phone


def test_missing_user_is_404(client, auth_headers):
    assert client.get(f"{USERS}/{uuid.uuid4()}", headers=auth_headers).status_code == 404
    assert client.delete(f"{USERS}/{uuid.uuid4()}", headers=auth_headers).status_code == 404


def test_delete_cascades_products_images_and_reports(client, auth_headers, member, session, storage):
    product = client.post(
        f"{API}/admin/products",
        json={"owner_user_id": str(member.id), "title": "Saree", "price": "₹100"},
        headers=auth_headers,
    ).json()
    client.post(
        f"{API}/admin/products/{product['id']}/images",
        files=[("files", ("a.bmp", gradient_image(32, 32), "image/bmp"))],
        headers=auth_headers,
    )
    session.add(Report(reporter_user_id=member.id, reason="spam"))
    session.commit()

    response = client.delete(f"{USERS}/{member.id}", headers=auth_headers)

    assert response.status_code == 204
    assert client.get(f"{API}/admin/products/{product['id']}", headers=auth_headers).status_code == 404
    assert client.get(f"{API}/admin/reports", headers=auth_headers).json() == []
    assert storage.objects == {}


def test_database_errors_become_500(client, auth_headers, monkeypatch):
    def broken(session):
        raise SQLAlchemyError("connection lost")

    monkeypatch.setattr("admin_api.routers.users.service.list_users", broken)

    response = client.get(USERS, headers=auth_headers)

    assert response.status_code == 500
    assert response.json() == {"detail": "Database error"}
