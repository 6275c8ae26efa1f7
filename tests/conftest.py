import os
import uuid
from types import SimpleNamespace

# Settings are read at import time by admin_api.database
os.environ["SUPABASE_URL"] = "https://rentals-test.supabase.co"
os.environ["SUPABASE_KEY"] = "test-anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-service-role-key"
os.environ["SUPABASE_JWT_SECRET"] = "test-jwt-secret"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from admin_api.database import get_session
from admin_api.main import app
from admin_api.models.user import Admin, User
from tests.helpers import STORAGE_PUBLIC, make_token


class FakeBucket:
    def __init__(self, storage: "FakeStorage", name: str):
        self.storage = storage
        self.name = name

    def upload(self, path, file, file_options=None):
        if self.storage.fail_uploads:
            raise RuntimeError("storage unavailable")
        self.storage.objects[path] = file
        self.storage.content_types[path] = (file_options or {}).get("content-type")

    def get_public_url(self, path):
        return f"{STORAGE_PUBLIC}/{self.name}/{path}"

    def remove(self, paths):
        for path in paths:
            self.storage.objects.pop(path, None)
            self.storage.removed.append(path)


class FakeStorage:
    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}
        self.removed: list[str] = []
        self.fail_uploads = False

    def from_(self, bucket):
        return FakeBucket(self, bucket)


@pytest.fixture
def storage(monkeypatch) -> FakeStorage:
    fake = FakeStorage()
    client = SimpleNamespace(storage=fake)
    monkeypatch.setattr("admin_api.core.storage_utils.supabase_admin", lambda: client)
    return fake


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def client(engine, storage):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(session) -> Admin:
    row = Admin(auth_user_id=uuid.uuid4(), email="ops@rentalwardrobe.in")
    session.add(row)
    session.commit()
    session.refresh(row)
    return row


@pytest.fixture
def auth_headers(admin) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(admin.auth_user_id)}"}


@pytest.fixture
def member(session) -> User:
    user = User(name="Asha Rao", phone="+91 9876543210", email="asha@example.com")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user
