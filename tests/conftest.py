"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from src.api.dependencies import get_blob_store, get_notifier
from src.database import Base, get_db
from src.main import app
from src.services.storage import InMemoryBlobStore


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id, email and token."""

    def __init__(
        self, *args, user_id: int | None = None, email: str = "", token: str = "", **kwargs
    ):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email
        self.token = token


class FakeNotifier:
    """Records submissions instead of calling Mailjet."""

    def __init__(self):
        self.sent = []
        self.error = None

    async def notify(self, name, email, subject, message):
        if self.error:
            raise self.error
        self.sent.append({"name": name, "email": email, "subject": subject, "message": message})


TEST_EMAIL = "admin@example.com"
TEST_PASSWORD = "testpass123"  # noqa: S105

# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace("/showcase", "/showcase_test")
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    from src import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    # Don't drop database - just leave it for next run (each test cleans up after itself)


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def blob_store():
    """In-memory blob store shared by the app and the test."""
    return InMemoryBlobStore(bucket="showcase-test", region="eu-west-1")


@pytest.fixture
def notifier():
    """Fake contact-form notifier."""
    return FakeNotifier()


@pytest.fixture(scope="function")
def client(db, blob_store, notifier):
    """Create a test client with database and external service overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Create a user, log in and return auth headers with user info."""
    response = client.post(
        "/register",
        json={"email": TEST_EMAIL, "password": TEST_PASSWORD},
    )
    assert response.status_code == 200

    response = client.post("/login", json={"email": TEST_EMAIL, "password": TEST_PASSWORD})
    assert response.status_code == 200
    data = response.json()
    token = data["access_token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["id"],
        email=data["email"],
        token=token,
    )

