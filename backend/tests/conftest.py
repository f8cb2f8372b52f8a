import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["FRONTEND_URL"] = "http://frontend.test"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from app.core.security import get_password_hash
from app.db import get_session
from app.main import app
from app.models import Availability, User

# 2025-01-06 is a Monday
MONDAY = "2025-01-06"
TUESDAY = "2025-01-07"
SATURDAY = "2025-01-11"


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
def client(engine):
    def _get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session):
    def _make_user(email: str = "organizer@example.com", name: str = "Organizer", time_zone: str = "UTC") -> User:
        user = User(
            name=name,
            email=email,
            hashed_password=get_password_hash("secret123"),
            time_zone=time_zone,
        )
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make_user


@pytest.fixture
def organizer(make_user) -> User:
    return make_user()


@pytest.fixture
def weekday_availability(session, organizer) -> Availability:
    """Organizer available 09:00-17:00 on weekdays."""
    availability = Availability(
        user_id=organizer.id,
        start_time="09:00",
        end_time="17:00",
        days=["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
    )
    session.add(availability)
    session.commit()
    session.refresh(availability)
    return availability


def register(client, email="alice@example.com", name="Alice", password="secret123", time_zone=None):
    payload = {"name": name, "email": email, "password": password}
    if time_zone:
        payload["timeZone"] = time_zone
    res = client.post("/api/auth/register", json=payload)
    assert res.status_code == 201, res.text
    body = res.json()
    return body["token"], body["user"]


@pytest.fixture
def auth(client):
    """Registered user: (headers, user json)."""
    token, user = register(client)
    return {"Authorization": f"Bearer {token}"}, user
