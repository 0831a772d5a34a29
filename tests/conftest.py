import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import walkguard.models  # noqa: F401
from walkguard import crud
from walkguard.core.security import create_access_token
from walkguard.db.database import Base, get_db
from walkguard.main import app
from walkguard.models.user import AuthProvider
from walkguard.schemas.user import UserCreate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(engine):
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(*, email=None, phone=None, name=None, provider=AuthProvider.EMAIL):
        return crud.user.create(
            db,
            obj_in=UserCreate(email=email, phone=phone, name=name, provider=provider),
        )

    return _make_user


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture
def walker(make_user):
    return make_user(email="walker@x.com", name="Wendy")


@pytest.fixture
def walker_headers(walker):
    return auth_headers(walker)


def add_contact(client, headers, *, name="Guardian", phone="+15550000001", email=None, type="guardian") -> int:
    payload = {"name": name, "phone": phone, "type": type}
    if email is not None:
        payload["email"] = email
    response = client.post("/api/v1/contacts/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["contact"]["id"]


def start_walk(client, headers, *, lat=10.0, lng=20.0, mode="friend", contact_ids=None, guardian_ids=None) -> int:
    response = client.post(
        "/api/v1/walks/start",
        json={
            "mode": mode,
            "location": {"lat": lat, "lng": lng},
            "contactIds": contact_ids or [],
            "guardianIds": guardian_ids or [],
        },
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["sessionId"]
