"""
Shared pytest fixtures.

Every test runs against a fresh in-memory SQLite database. The API client
and the service level tests share one session so that data created in a
test is visible to the requests it makes.
"""

import os
from decimal import Decimal
from typing import Generator

import pytest

# Settings are read at import time, point them at SQLite before importing the app
os.environ["DATABASE_URL"] = "sqlite://"

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core import security  # noqa: E402
from app.core.database import Base, custom_json_serializer, get_db  # noqa: E402
from app.main import app  # noqa: E402
from app.models.internal_model import (  # noqa: E402
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    Address,
    Category,
    CategoryAttribute,
    Product,
    User,
)
from app.utils.slug import generate_slug  # noqa: E402


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        json_serializer=custom_json_serializer,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine) -> Generator[Session, None, None]:
    """Session used by the test body and by every request of the client."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db) -> Generator[TestClient, None, None]:
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ============================================================================
# USERS
# ============================================================================


def _make_user(db: Session, phone: str, role: str, **extra) -> User:
    user = User(
        phone_number=phone,
        password_hash=security.get_password_hash("secret-password"),
        first_name=extra.pop("first_name", "Test"),
        last_name=extra.pop("last_name", "User"),
        role=role,
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer(db) -> User:
    return _make_user(db, "+971500000001", ROLE_CUSTOMER)


@pytest.fixture
def admin(db) -> User:
    return _make_user(db, "+971500000099", ROLE_ADMIN, first_name="Admin")


@pytest.fixture
def customer_headers(customer) -> dict:
    return {"Authorization": f"Bearer {security.create_access_token(customer)}"}


@pytest.fixture
def admin_headers(admin) -> dict:
    return {"Authorization": f"Bearer {security.create_access_token(admin)}"}


@pytest.fixture
def address(db, customer) -> Address:
    address = Address(
        user_id=customer.id,
        name="Home",
        phone="+971500000001",
        city="Dubai",
        area="Marina",
        street="Harbour street 1",
        is_default=True,
    )
    db.add(address)
    db.commit()
    db.refresh(address)
    return address


# ============================================================================
# CATALOG FACTORIES
# ============================================================================


@pytest.fixture
def make_category(db):
    def factory(name, parent=None, attributes=None, **extra) -> Category:
        category = Category(
            name=name,
            slug=extra.pop("slug", generate_slug(name)),
            parent_id=parent.id if parent else None,
            **extra,
        )
        db.add(category)
        db.flush()
        if attributes is not None:
            db.add(CategoryAttribute(category_id=category.id, attributes=attributes))
        db.commit()
        db.refresh(category)
        return category

    return factory


@pytest.fixture
def make_product(db):
    def factory(name, category, price="100.00", stock=10, **extra) -> Product:
        product = Product(
            name=name,
            slug=extra.pop("slug", generate_slug(name)),
            description=extra.pop("description", f"{name} description"),
            price=Decimal(price),
            category_id=category.id,
            stock_quantity=stock,
            in_stock=stock > 0,
            **extra,
        )
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    return factory


@pytest.fixture
def electronics_tree(make_category):
    """Electronics > Laptops > Gaming, plus an unrelated Home root."""
    electronics = make_category("Electronics")
    laptops = make_category("Laptops", parent=electronics)
    gaming = make_category("Gaming", parent=laptops)
    home = make_category("Home")
    return {
        "electronics": electronics,
        "laptops": laptops,
        "gaming": gaming,
        "home": home,
    }
