"""
Pytest configuration and fixtures for backend tests.
"""

import os

# Settings are read at import time; configure before importing the app
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("TOKEN_STORE_BACKEND", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("SEED_MENU_ON_STARTUP", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rest_api.main import app
from rest_api.models import Base
from shared.infrastructure.db import get_db
from shared.security.token_store import MemoryTokenStore, get_token_store
from tests.factories import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    USER_EMAIL,
    USER_PASSWORD,
    login,
    make_product,
    make_user,
)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def token_store():
    """Process-local session store shared by the app and the test."""
    return MemoryTokenStore()


@pytest.fixture(scope="function")
def client(db_session, token_store):
    """
    Create a test client with database session and token store overrides.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_store] = lambda: token_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def seed_admin_user(db_session):
    """Create an admin user for testing admin endpoints."""
    return make_user(db_session, ADMIN_EMAIL, ADMIN_PASSWORD, "admin", name="Test Admin")


@pytest.fixture
def seed_regular_user(db_session):
    """Create a non-admin user."""
    return make_user(db_session, USER_EMAIL, USER_PASSWORD, "user", name="Test Customer")


@pytest.fixture
def auth_headers(client, seed_admin_user):
    """Get admin authentication headers for API calls."""
    token = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_auth_headers(client, seed_regular_user):
    """Get non-admin authentication headers for API calls."""
    token = login(client, USER_EMAIL, USER_PASSWORD)["accessToken"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_product(db_session):
    """A $10.00 product with stock 10."""
    return make_product(db_session)
