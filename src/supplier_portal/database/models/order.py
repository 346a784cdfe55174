"""
Order model - draft and last submitted amount for one tenant product.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, Float, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class Order(Base):
    """At most one order exists per (tenant, product)."""

    __tablename__ = "orders"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid4)

    tenant_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    product_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False
    )

    # Draft being edited
    amount = Column(Float, default=0.0, nullable=False)

    # Last finalized amount
    last_submitted_amount = Column(Float, nullable=True)
    last_submitted_at = Column(DateTime(timezone=True), nullable=True)

    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    product = relationship("Product", back_populates="order")

    __table_args__ = (
        Index("idx_orders_tenant_product", "tenant_id", "product_id", unique=True),
    )

    def __repr__(self):
        return (
            f"<Order(id={self.id}, product={self.product_id}, "
            f"amount={self.amount}, last_submitted={self.last_submitted_amount})>"
        )
