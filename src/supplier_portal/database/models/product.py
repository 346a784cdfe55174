"""
Tenant-scoped product model.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class Product(Base):
    """
    Product owned by exactly one tenant.

    Created either by the tenant itself or by an administrator assigning a
    master catalog product, in which case ``master_product_id`` is set.
    """

    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    tenant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    master_product_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("master_products.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    sku = Column(String(100), nullable=False)
    name = Column(String(500), nullable=False)
    price = Column(Float, nullable=False)
    unit = Column(String(50), nullable=False)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    last_updated = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    tenant = relationship("Tenant", back_populates="products")
    order = relationship("Order", back_populates="product", uselist=False, passive_deletes=True)

    __table_args__ = (
        Index("idx_products_tenant_sku", "tenant_id", "sku", unique=True),
    )

    def __repr__(self):
        return f"<Product(id={self.id}, tenant={self.tenant_id}, sku='{self.sku}')>"
