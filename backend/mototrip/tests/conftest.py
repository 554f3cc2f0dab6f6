"""
Shared fixtures: in-memory database, test client and Auth0-style tokens.
"""
import os

# Must be set before mototrip.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from mototrip.core.config import settings
from mototrip.db.base import Base
from mototrip.db.session import get_db, init_db
from mototrip.main import app

TEST_SECRET = "test-client-secret"
TEST_DOMAIN = "mototrip-test.eu.auth0.com"
TEST_AUDIENCE = "https://api.mototrip.test"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def auth0_settings(monkeypatch):
    """Verify HS256 tokens signed with the test client secret."""
    monkeypatch.setattr(settings, "AUTH0_DOMAIN", TEST_DOMAIN)
    monkeypatch.setattr(settings, "AUTH0_AUDIENCE", TEST_AUDIENCE)
    monkeypatch.setattr(settings, "AUTH0_ISSUER", "")
    monkeypatch.setattr(settings, "AUTH0_ALGORITHMS", ["HS256"])
    monkeypatch.setattr(settings, "AUTH0_CLIENT_SECRET", TEST_SECRET)


@pytest.fixture
def db_session():
    init_db(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_token(sub: str, expires_in: int = 3600, **claims) -> str:
    """Mint a token the way the Auth0 tenant would."""
    now = datetime.utcnow()
    payload = {
        "sub": sub,
        "aud": TEST_AUDIENCE,
        "iss": f"https://{TEST_DOMAIN}/",
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    payload.update(claims)
    return jwt.encode(payload, TEST_SECRET, algorithm="HS256")


def auth_headers(sub: str, **claims) -> dict:
    return {"Authorization": f"Bearer {make_token(sub, **claims)}"}


def _bootstrap(client, sub: str, name: str, email: str) -> dict:
    headers = auth_headers(sub, name=name, email=email)
    response = client.get("/api/me", headers=headers)
    assert response.status_code == 200
    return {"headers": headers, "id": response.json()["id"], "email": email}


@pytest.fixture
def alice(client):
    return _bootstrap(client, "auth0|alice", "Alice Rider", "alice@example.com")


@pytest.fixture
def bob(client):
    return _bootstrap(client, "auth0|bob", "Bob Pillion", "bob@example.com")


@pytest.fixture
def carol(client):
    return _bootstrap(client, "auth0|carol", "Carol Outsider", "carol@example.com")


def create_trip(client, user: dict, **overrides) -> dict:
    payload = {
        "name": "Alps Adventure 2026",
        "start_date": "2026-06-01",
        "end_date": "2026-06-07",
        "base_currency": "EUR",
    }
    payload.update(overrides)
    response = client.post("/api/trips", json=payload, headers=user["headers"])
    assert response.status_code == 201, response.text
    return response.json()


def add_member(client, trip_id: int, owner: dict, member: dict, role: str = "Editor") -> None:
    response = client.post(
        f"/api/trips/{trip_id}/members",
        json={"email": member["email"], "role": role},
        headers=owner["headers"]
    )
    assert response.status_code == 201, response.text


@pytest.fixture
def trip(client, alice):
    return create_trip(client, alice)
