"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Database sessions (in-memory SQLite for fast tests)
- FastAPI test client
- In-memory repositories
- Bearer tokens and test data factories
"""

import itertools
import os
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Generator

# Settings are read at import time, so point them at test values first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["DB_INIT_ON_STARTUP"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-vehicle-inventory-tests"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Import app and models
from app.main import app
from app.infrastructure.persistence import models
from app.infrastructure.persistence.models import Base
from app.infrastructure.persistence.db import get_db
from app.infrastructure.persistence.repositories.in_memory_administrator_repository import (
    InMemoryAdministratorRepository,
)
from app.infrastructure.persistence.repositories.in_memory_rating_repository import (
    InMemoryRatingRepository,
)
from app.infrastructure.persistence.repositories.in_memory_store import InMemoryStore
from app.infrastructure.persistence.repositories.in_memory_vehicle_repository import (
    InMemoryVehicleRepository,
)
from factories import make_token


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    # Use in-memory SQLite for fast tests
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite (cascade and restrict rely on it)
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Drop all tables after test
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(scope="function")
def client(test_db_session) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with test database."""

    def override_get_db():
        try:
            yield test_db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# IN-MEMORY REPOSITORY FIXTURES
# ==============================================================================

@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def memory_repos(memory_store):
    """In-memory vehicle, administrator and rating repositories sharing one store."""
    return {
        "vehicle_repo": InMemoryVehicleRepository(memory_store),
        "administrator_repo": InMemoryAdministratorRepository(memory_store),
        "rating_repo": InMemoryRatingRepository(memory_store),
    }


@pytest.fixture
def ticking_clock():
    """Clock that moves one second forward on every call."""
    start = datetime(2025, 11, 10, 12, 0, 0)
    ticks = itertools.count()
    return lambda: start + timedelta(seconds=next(ticks))


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def sample_vehicle_payload():
    """Sample vehicle request body for testing."""
    return {
        "name": "Onix LT",
        "make": "Chevrolet",
        "year": 2021,
        "plate": "XYZ9K88",
        "status": "Available",
        "color": "Red",
        "mileage": "32000",
        "price": "78900.90",
        "description": "Compact hatchback",
        "photo_urls": [
            "https://example.com/onix-1.jpg",
            "https://example.com/onix-2.jpg",
        ],
    }


@pytest.fixture
def make_db_administrator(test_db_session):
    """Insert administrators straight into the test database."""
    counter = itertools.count(1)

    def _make(email: str = None, profile: str = "Adm") -> models.Administrator:
        row = models.Administrator(
            email=email or f"admin{next(counter)}@example.com",
            secret="$2b$12$placeholderhash",
            profile=profile,
        )
        test_db_session.add(row)
        test_db_session.commit()
        test_db_session.refresh(row)
        return row

    return _make


@pytest.fixture
def make_db_vehicle(test_db_session):
    """Insert vehicles straight into the test database."""

    def _make(name: str = "Corolla XEi", photo_urls=("https://example.com/photo.jpg",)) -> models.Vehicle:
        row = models.Vehicle(
            name=name,
            make="Toyota",
            year=2022,
            plate="ABC1D23",
            color="Silver",
            mileage=Decimal("15000"),
            price=Decimal("125000"),
            photos=[models.VehiclePhoto(url=url) for url in photo_urls],
        )
        test_db_session.add(row)
        test_db_session.commit()
        test_db_session.refresh(row)
        return row

    return _make


# ==============================================================================
# AUTHENTICATION FIXTURES
# ==============================================================================
@pytest.fixture
def auth_headers():
    """Build Authorization headers for an administrator ID."""
    def _headers(admin_id) -> dict:
        return {"Authorization": f"Bearer {make_token(admin_id)}"}
    return _headers


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture(autouse=True)
def reset_environment():
    """Reset environment variables after each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
