import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base, utcnow


class Favourite(Base):
    """A product saved by a user, one row per (user, product) pair."""

    __tablename__ = "favourites"

    id = Column(String, primary_key=True, index=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(String, ForeignKey("products.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    product = relationship("Product")

    __table_args__ = (UniqueConstraint("user_id", "product_id"),)
