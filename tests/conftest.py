"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client, caller token and product fixtures.

==============================================================================
"""

import os

# Settings are cached on first import, so point them at throwaway values first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-catalog-tests"
os.environ.pop("SEED_PRODUCTS_FILE", None)

import pytest
from datetime import timedelta
from typing import Any, Callable, Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, get_db
from app.db.models import Product
from app.core.security import get_security_manager


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# TOKEN FIXTURES
# ============================================================================

@pytest.fixture
def admin_token() -> str:
    """Create access token for an admin caller."""
    security = get_security_manager()
    return security.create_access_token({
        "sub": "admin-1",
        "username": "admin",
        "role": "admin"
    })


@pytest.fixture
def user_token() -> str:
    """Create access token for a regular caller."""
    security = get_security_manager()
    return security.create_access_token({
        "sub": "user-1",
        "username": "shopper",
        "role": "user"
    })


@pytest.fixture
def expired_token() -> str:
    """Access token that expired a minute ago."""
    security = get_security_manager()
    return security.create_access_token(
        {"sub": "user-1", "username": "shopper", "role": "user"},
        expires_delta=timedelta(minutes=-1)
    )


# ============================================================================
# HEADER FIXTURES
# ============================================================================

@pytest.fixture
def admin_headers(admin_token: str) -> Dict[str, str]:
    """Authorization headers for the admin caller."""
    return {"Authorization": f"Bearer {admin_token}"}


@pytest.fixture
def user_headers(user_token: str) -> Dict[str, str]:
    """Authorization headers for the regular caller."""
    return {"Authorization": f"Bearer {user_token}"}


# ============================================================================
# PRODUCT FIXTURES
# ============================================================================

@pytest.fixture
def make_product(db: Session) -> Callable[..., Product]:
    """Factory inserting a product directly into the test database."""
    def _make(title: str = "iPhone 9", **overrides: Any) -> Product:
        fields = {
            "title": title,
            "description": f"{title} description",
            "price": 549.0,
            "discount_percentage": 12.5,
            "stock": 10,
            "brand": "Apple",
            "category": "smartphones",
            "images": [],
            "specifications": {},
            "comments": [],
        }
        fields.update(overrides)

        product = Product(**fields)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return _make


@pytest.fixture
def new_product_payload() -> Dict[str, Any]:
    """Valid create request body."""
    return {
        "title": "Galaxy S21",
        "description": "Samsung flagship phone",
        "price": 799,
        "discountPercentage": 5.5,
        "stock": 20,
        "brand": "Samsung",
        "category": "smartphones",
        "images": ["https://cdn.example.com/s21.jpg"],
        "specifications": {"storage": "128GB"}
    }


@pytest.fixture
def comment_payload() -> Dict[str, Any]:
    """Valid comment request body."""
    return {
        "comment": "Great phone",
        "rating": 5,
        "reviewerName": "Jane",
        "reviewerEmail": "jane@example.com"
    }
