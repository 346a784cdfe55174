"""
Administrator account model.
"""

from datetime import datetime
import uuid

from sqlalchemy import Column, String, DateTime, Uuid

from .base import Base


class AdminAccount(Base):
    """
    Administrator with access to every tenant and the master catalog.

    The default administrator is created on startup from configuration.
    """

    __tablename__ = "admin_accounts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Stored lower-cased, lookups are case-insensitive
    username = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<AdminAccount(id={self.id}, username='{self.username}')>"
