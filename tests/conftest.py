import os
import uuid

# Must be set before tasklist modules read their config
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_tasklist.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from tasklist.main import app  # noqa: E402
from tasklist.database import SessionLocal, Base, engine  # noqa: E402

PASSWORD = "SecurePass123!"


# Recreate all tables for each test
@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def sign_up(client: TestClient, email: str = None, password: str = PASSWORD) -> dict:
    """Register and log in a fresh user; return bearer headers for API calls."""
    email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
    r = client.post("/auth/register", json={"email": email, "password": password})
    assert r.status_code == 201, r.text
    r = client.post("/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    # keep cookie-less requests explicit; tests that need the cookie read it from the client
    client.cookies.clear()
    return {"Authorization": f"Bearer {r.json()['token']}"}


@pytest.fixture
def auth_headers(client) -> dict:
    return sign_up(client)


@pytest.fixture
def other_headers(client) -> dict:
    return sign_up(client)


def make_task(client: TestClient, headers: dict, title: str) -> dict:
    r = client.post("/api/tasks", json={"title": title}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


