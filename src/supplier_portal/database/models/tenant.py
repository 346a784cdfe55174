"""
Tenant model - a supplier or customer account with its own products and orders.
"""

from datetime import datetime
import uuid

from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship

from .base import Base


class Tenant(Base):
    """
    Supplier or customer account.

    Dependent products and orders are removed explicitly by the account
    service, never by relationship cascades.
    """

    __tablename__ = "tenants"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Authentication (username stored lower-cased)
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    company_name = Column(String(255), nullable=False)
    contact_person = Column(String(255), nullable=False)

    # Status
    is_active = Column(Boolean, default=True, nullable=False)

    # Activity tracking
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    products = relationship("Product", back_populates="tenant", passive_deletes=True)

    def __repr__(self):
        return f"<Tenant(id={self.id}, username='{self.username}', company='{self.company_name}')>"
