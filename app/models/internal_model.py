# app/models/internal_model.py

import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
)
from sqlalchemy.orm import relationship

from app.core.database import Base, utcnow

# Import other models to ensure they are registered with SQLAlchemy's Base
from app.models.category_models import Category, CategoryAttribute  # noqa: F401
from app.models.product_models import Product  # noqa: F401
from app.models.cart_models import Cart, CartItem  # noqa: F401
from app.models.order_models import Order, OrderItem  # noqa: F401
from app.models.favourite_models import Favourite  # noqa: F401

ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"


class User(Base):
    """
    Represents a shop user. Customers and administrators share the table and
    are told apart by ``role``.
    """

    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    phone_number = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    email = Column(String, unique=True, index=True, nullable=True)
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)

    role = Column(String, default=ROLE_CUSTOMER, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    addresses = relationship(
        "Address", back_populates="user", cascade="all, delete-orphan"
    )
    cart = relationship(
        "Cart", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )
    orders = relationship("Order", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


class Address(Base):
    """
    A delivery address owned by a user. At most one address per user is the
    default one.
    """

    __tablename__ = "addresses"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    phone = Column(String, nullable=False)
    city = Column(String(100), nullable=False)
    area = Column(String(100), nullable=False)
    street = Column(String(255), nullable=False)
    landmark = Column(String(255), nullable=True)
    apartment_number = Column(String(20), nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", back_populates="addresses")
