import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.core.database import Base, utcnow

SEARCH_CONFIG = "simple"


class Product(Base):
    """
    A sellable item. Belongs to exactly one category.

    ``attributes`` is a free-form ``{key: value}`` map. Values are stored as
    given and are not checked against the category's attribute definitions.
    """

    __tablename__ = "products"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    name_ar = Column(String(200), nullable=True)
    description = Column(Text, nullable=False, default="")
    description_ar = Column(Text, nullable=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    compare_at_price = Column(Numeric(12, 2), nullable=True)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False, index=True)
    images = Column(JSON, nullable=False, default=list)
    in_stock = Column(Boolean, default=False, nullable=False, index=True)
    stock_quantity = Column(Integer, default=0, nullable=False)
    sku = Column(String, unique=True, nullable=True)

    # Admin only, never exposed on customer endpoints
    supplier_name = Column(String, nullable=True)
    supplier_contact = Column(String, nullable=True)
    supplier_notes = Column(Text, nullable=True)
    supplier_price = Column(Numeric(12, 2), nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)
    is_featured = Column(Boolean, default=False, nullable=False, index=True)
    is_sponsored = Column(Boolean, default=False, nullable=False)
    views = Column(Integer, default=0, nullable=False)
    attributes = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    category = relationship("Category", back_populates="products")

    __table_args__ = (
        Index("ix_products_category_active_stock", "category_id", "is_active", "in_stock"),
        Index("ix_products_featured_active", "is_featured", "is_active"),
        Index("ix_products_views", "views"),
    )

    @property
    def discount_percentage(self) -> int:
        if not self.compare_at_price or self.compare_at_price <= self.price:
            return 0
        return round(
            float((self.compare_at_price - self.price) / self.compare_at_price) * 100
        )

    @property
    def profit_margin(self) -> float:
        if not self.supplier_price:
            return 0
        return float(self.price - self.supplier_price)


def search_vector():
    """Full text document of a product, shared by the GIN index and queries."""
    return func.to_tsvector(
        SEARCH_CONFIG,
        func.coalesce(Product.name, "") + " " + func.coalesce(Product.description, ""),
    )


# Only PostgreSQL understands tsvector expression indexes.
Index("ix_products_search", search_vector(), postgresql_using="gin").ddl_if(
    dialect="postgresql"
)
