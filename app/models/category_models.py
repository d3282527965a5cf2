import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
)
from sqlalchemy.orm import relationship

from app.core.database import Base, utcnow

# --- Category Models ---


class Category(Base):
    """
    A node of the catalog tree. ``parent_id`` is a plain back-reference to
    another row of the same table; a category never owns its parent.
    """

    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), unique=True, nullable=False)
    name_ar = Column(String(100), nullable=True)
    description = Column(String(500), nullable=True)
    description_ar = Column(String(500), nullable=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    image = Column(String, nullable=True)
    parent_id = Column(
        String, ForeignKey("categories.id"), nullable=True, index=True, default=None
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    parent = relationship("Category", remote_side=[id])
    products = relationship("Product", back_populates="category")


class CategoryAttribute(Base):
    """
    Attribute definitions declared directly on one category.

    ``attributes`` is a list of dicts shaped like
    ``AttributeDefinitionSchema``; inherited definitions are never copied here.
    """

    __tablename__ = "category_attributes"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    category_id = Column(
        String, ForeignKey("categories.id"), unique=True, nullable=False, index=True
    )
    attributes = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    category = relationship("Category")
