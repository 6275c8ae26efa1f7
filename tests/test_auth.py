import uuid
from types import SimpleNamespace

import pytest
from supabase import AuthError

from admin_api.core.config import get_settings
from tests.helpers import API, make_token


class InvalidCredentials(AuthError):
    def __init__(self, message):
        Exception.__init__(self, message)


class FakeAuth:
    def __init__(self, users: dict[str, tuple[str, uuid.UUID]]):
        self.users = users
        self.signed_out = 0
        self.revoked: list[str] = []
        self.admin = SimpleNamespace(sign_out=self.revoked.append)

    def sign_in_with_password(self, credentials):
        known = self.users.get(credentials["email"])
        if known is None or known[0] != credentials["password"]:
            raise InvalidCredentials("Invalid login credentials")
        return SimpleNamespace(
            user=SimpleNamespace(id=str(known[1])),
            session=SimpleNamespace(
                access_token="access-token",
                refresh_token="refresh-token",
                expires_in=3600,
            ),
        )

    def sign_out(self):
        self.signed_out += 1


@pytest.fixture
def fake_auth(monkeypatch, admin):
    auth = FakeAuth(
        {
            admin.email: ("correct-horse", admin.auth_user_id),
            "renter@example.com": ("pw", uuid.uuid4()),
        }
    )
    monkeypatch.setattr(
        "admin_api.services.auth_service.supabase_public",
        lambda: SimpleNamespace(auth=auth),
    )
    return auth


def test_login_returns_session_and_admin(client, admin, fake_auth):
    response = client.post(
        f"{API}/auth/login", json={"email": admin.email, "password": "correct-horse"}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["access_token"] == "access-token"
    assert body["token_type"] == "bearer"
    assert body["admin"]["auth_user_id"] == str(admin.auth_user_id)


def test_login_with_wrong_password(client, admin, fake_auth):
    response = client.post(f"{API}/auth/login", json={"email": admin.email, "password": "nope"})
    assert response.status_code == 401


def test_login_of_non_admin_signs_out_again(client, fake_auth):
    response = client.post(
        f"{API}/auth/login", json={"email": "renter@example.com", "password": "pw"}
    )

    assert response.status_code == 403
    assert fake_auth.signed_out == 1


def test_login_refused_with_placeholder_config(client, admin, fake_auth, monkeypatch):
    placeholder = get_settings().model_copy(
        update={"SUPABASE_URL": "https://your-project.supabase.co"}
    )
    monkeypatch.setattr("admin_api.services.auth_service.get_settings", lambda: placeholder)

    response = client.post(
        f"{API}/auth/login", json={"email": admin.email, "password": "correct-horse"}
    )

    assert response.status_code == 503


def test_placeholder_detection():
    settings = get_settings()
    assert settings.has_placeholder_supabase_config() is False
    assert settings.model_copy(update={"SUPABASE_KEY": ""}).has_placeholder_supabase_config()
    assert settings.model_copy(
        update={"SUPABASE_KEY": "your-anon-key"}
    ).has_placeholder_supabase_config()


def test_logout_revokes_token(client, auth_headers, fake_auth):
    response = client.post(f"{API}/auth/logout", headers=auth_headers)

    assert response.status_code == 204
    assert fake_auth.revoked == [auth_headers["Authorization"].removeprefix("Bearer ")]


def test_logout_requires_token(client):
    assert client.post(f"{API}/auth/logout").status_code == 401


def test_me(client, admin, auth_headers):
    response = client.get(f"{API}/auth/me", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["email"] == admin.email


def test_expired_token_is_401(client, admin):
    headers = {"Authorization": f"Bearer {make_token(admin.auth_user_id, expires_in=-60)}"}
    assert client.get(f"{API}/auth/me", headers=headers).status_code == 401
