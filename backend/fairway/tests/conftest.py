"""
Shared fixtures: an in-memory SQLite database behind the real FastAPI app.
"""
import functools
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["EMAIL_API_KEY"] = ""
os.environ["WEATHER_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import fairway.models  # noqa: F401  (register tables)
from fairway.db.base import Base
from fairway.db.session import get_db
from fairway.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def signup_and_login(client, username, full_name=None, email=None):
    """Create an account and return bearer auth headers for it."""
    response = client.post(
        "/api/auth/signup",
        json={
            "username": username,
            "email": email or f"{username}@example.com",
            "password": "testpassword123",
            "full_name": full_name
        }
    )
    assert response.status_code == 201, response.text

    response = client.post(
        "/api/auth/login",
        json={"username": username, "password": "testpassword123"}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def make_user(client):
    """Factory: make_user("ben", email=...) returns auth headers for a new account."""
    return functools.partial(signup_and_login, client)


@pytest.fixture
def auth_headers(client):
    return signup_and_login(client, "organizer", full_name="Olivia Organizer")


@pytest.fixture
def trip(client, auth_headers):
    """A trip with the organizer plus two more golfers on the roster."""
    response = client.post(
        "/api/trips",
        json={
            "trip_name": "Pinehurst Weekend",
            "start_date": "2026-02-27",
            "end_date": "2026-03-01",
            "location": "Pinehurst, NC"
        },
        headers=auth_headers
    )
    assert response.status_code == 201, response.text
    trip_data = response.json()

    for name, hcp in [("Ben Hogan", 4), ("Sam Snead", 7)]:
        added = client.post(
            f"/api/trips/{trip_data['id']}/golfers",
            json={"name": name, "handicap": hcp},
            headers=auth_headers
        )
        assert added.status_code == 201, added.text

    golfers = client.get(f"/api/trips/{trip_data['id']}/golfers", headers=auth_headers).json()
    trip_data["golfer_ids"] = [g["id"] for g in golfers]
    return trip_data
