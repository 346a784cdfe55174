"""
Transaction management utilities for database operations.

Multi-step operations such as cascade deletes run inside ``transaction_scope``
so that either every step is committed or none is.
"""

from contextlib import contextmanager

from sqlalchemy.orm import Session

from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def transaction_scope(db: Session, auto_commit: bool = True):
    """
    Context manager for database transactions with automatic rollback.

    Usage:
        with transaction_scope(db):
            db.query(Order).filter(Order.tenant_id == tenant.id).delete()
            db.delete(tenant)
            # Commits on success, rolls back on error

    Args:
        db: SQLAlchemy session
        auto_commit: Whether to commit automatically (default: True)

    Yields:
        Session: Database session

    Raises:
        Exception: Re-raises any exception after rollback

    Note:
        Does NOT close the session, the request dependency owns it.
    """
    try:
        yield db
        if auto_commit:
            db.commit()
            logger.debug("Transaction committed successfully")
    except Exception as e:
        db.rollback()
        logger.error(f"Transaction rolled back due to error: {e}")
        raise
