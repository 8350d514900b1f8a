"""Pytest configuration and fixtures."""

import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from statusboard.config import Settings
from statusboard.database import Base, get_db
from statusboard.main import create_app
from statusboard.models import Status
from statusboard.services.auth import create_user


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and username."""

    def __init__(self, *args, user_id: int | None = None, username: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.username = username


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/team_availability", "/team_availability_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "testpass123"
STATUS_NAMES = ["Working", "On Vacation", "Working Remotely", "Business Trip"]


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": SQLALCHEMY_DATABASE_URL,
        "environment": "testing",
        "admin_routes_enabled": True,
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    from statusboard import models  # noqa: F401

    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        # For PostgreSQL, create the test database
        from sqlalchemy_utils import create_database, database_exists

        # Create test database if it doesn't exist
        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

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


def _client_for(app, db):
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""
    app = create_app(make_settings())
    with _client_for(app, db) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client_without_admin_routes(db):
    """Test client for an app with the unauthenticated admin route switched off."""
    app = create_app(make_settings(admin_routes_enabled=False))
    with _client_for(app, db) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def statuses(db):
    """Seed the reference statuses; returns them keyed by name."""
    rows = [Status(id=i, name=name) for i, name in enumerate(STATUS_NAMES, start=1)]
    db.add_all(rows)
    db.commit()
    return {row.name: row for row in rows}


@pytest.fixture
def team(db, statuses):
    """A few teammates; alice has no status set."""
    return {
        "alice": create_user(db, "alice", TEST_PASSWORD, "Alice Cohen", "alice@example.com"),
        "bob": create_user(
            db, "bob", TEST_PASSWORD, "Bob Levi", "bob@example.com", statuses["On Vacation"].id
        ),
        "carol": create_user(
            db,
            "carol",
            TEST_PASSWORD,
            "Carol Mizrahi",
            "carol@example.com",
            statuses["Working Remotely"].id,
        ),
        "dan": create_user(
            db, "dan", TEST_PASSWORD, "Dan Peretz", "dan@example.com", statuses["Working"].id
        ),
    }


@pytest.fixture
def auth_headers(client, team):
    """Log alice in and return auth headers with user info."""
    response = client.post(
        "/api/auth/login",
        json={"username": "alice", "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    data = response.json()
    token = data["token"]

    return AuthHeaders(
        {"Authorization": f"Bearer {token}"},
        user_id=data["user"]["id"],
        username=data["user"]["username"],
    )
