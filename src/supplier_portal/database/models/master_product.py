"""
Master catalog product managed by administrators.
"""

from datetime import datetime
import uuid

from sqlalchemy import Column, String, Float, DateTime, Uuid

from .base import Base


class MasterProduct(Base):
    """Catalog entry copied into tenant products on assignment."""

    __tablename__ = "master_products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Globally unique
    sku = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(500), nullable=False)
    price = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<MasterProduct(id={self.id}, sku='{self.sku}', name='{self.name}')>"
