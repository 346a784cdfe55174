"""
Account management: authentication, tenant accounts, passwords, statistics
and default administrator bootstrap.
"""

from datetime import datetime
from typing import Dict, List, Optional, Tuple, Union
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from supplier_portal.auth import Principal, Role, hash_password, verify_password
from supplier_portal.database.models import AdminAccount, MasterProduct, Order, Product, Tenant
from supplier_portal.utils.exceptions import (
    AuthenticationError,
    ConflictError,
    InvalidTokenError,
    NotFoundError,
    ValidationError,
)
from supplier_portal.utils.logger import get_logger
from supplier_portal.utils.transaction import transaction_scope
from supplier_portal.utils.validation import clean_required

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"

Account = Union[AdminAccount, Tenant]


def normalize_username(username: Optional[str]) -> str:
    """Usernames are case-insensitive and stored lower-cased."""
    normalized = (username or "").strip().lower()
    if not normalized:
        raise ValidationError("Username is required", field="username")
    return normalized


# Authentication

def authenticate_admin(db: Session, username: str, password: str) -> AdminAccount:
    """
    Verify administrator credentials.

    Raises:
        AuthenticationError: Generic error for unknown username or wrong password
    """
    admin = db.query(AdminAccount).filter(
        AdminAccount.username == (username or "").strip().lower()
    ).first()

    if not admin or not verify_password(password, admin.password_hash):
        logger.warning(f"Failed admin login for '{username}'")
        raise AuthenticationError(INVALID_CREDENTIALS)

    admin.last_login_at = datetime.utcnow()
    db.commit()

    logger.info(f"Admin logged in: {admin.username}")
    return admin


def authenticate_tenant(db: Session, username: str, password: str) -> Tenant:
    """
    Verify tenant credentials.

    Deactivated tenants get the same generic error as a wrong password.

    Raises:
        AuthenticationError: Generic error for any rejected login
    """
    tenant = db.query(Tenant).filter(
        Tenant.username == (username or "").strip().lower()
    ).first()

    if not tenant or not verify_password(password, tenant.password_hash) or not tenant.is_active:
        logger.warning(f"Failed tenant login for '{username}'")
        raise AuthenticationError(INVALID_CREDENTIALS)

    tenant.last_login_at = datetime.utcnow()
    db.commit()

    logger.info(f"Tenant logged in: {tenant.username}")
    return tenant


def load_account(db: Session, principal: Principal) -> Account:
    """
    Load the account a token refers to.

    Raises:
        InvalidTokenError: If the account no longer exists
    """
    if principal.role is Role.ADMIN:
        account = db.query(AdminAccount).filter(AdminAccount.id == principal.account_id).first()
    else:
        account = db.query(Tenant).filter(Tenant.id == principal.account_id).first()

    if account is None:
        logger.warning(f"Token refers to missing {principal.role.value} account {principal.account_id}")
        raise InvalidTokenError("Invalid token.")

    return account


def change_password(db: Session, principal: Principal, current_password: str, new_password: str) -> None:
    """
    Change the caller's own password.

    Raises:
        ValidationError: If the current password is wrong or the new one too short
    """
    account = load_account(db, principal)

    if not verify_password(current_password, account.password_hash):
        raise ValidationError("Current password is incorrect", field="current_password")

    account.password_hash = hash_password(new_password)
    account.updated_at = datetime.utcnow()
    db.commit()

    logger.info(f"Password changed for {principal.role.value} {account.username}")


# Tenant accounts

def create_tenant(
    db: Session,
    username: str,
    password: str,
    company_name: str,
    contact_person: str
) -> Tenant:
    """
    Create a tenant account.

    Raises:
        ConflictError: If the username is already taken
        ValidationError: If the password is too short
    """
    username = normalize_username(username)

    if db.query(Tenant).filter(Tenant.username == username).first():
        raise ConflictError("Username already exists", {"username": username})

    tenant = Tenant(
        username=username,
        password_hash=hash_password(password),
        company_name=clean_required(company_name, "company_name"),
        contact_person=clean_required(contact_person, "contact_person"),
        is_active=True
    )
    db.add(tenant)

    try:
        db.commit()
    except IntegrityError:
        # Concurrent request registered the same username
        db.rollback()
        raise ConflictError("Username already exists", {"username": username})

    db.refresh(tenant)
    logger.info(f"Tenant created: {tenant.username} ({tenant.id})")
    return tenant


def list_tenants(db: Session) -> List[Tuple[Tenant, int]]:
    """All tenants with their product counts, newest first."""
    product_counts = dict(
        db.query(Product.tenant_id, func.count(Product.id)).group_by(Product.tenant_id).all()
    )
    tenants = db.query(Tenant).order_by(Tenant.created_at.desc()).all()
    return [(tenant, product_counts.get(tenant.id, 0)) for tenant in tenants]


def get_tenant(db: Session, tenant_id: UUID) -> Tenant:
    """
    Raises:
        NotFoundError: If the tenant does not exist
    """
    tenant = db.query(Tenant).filter(Tenant.id == tenant_id).first()
    if not tenant:
        raise NotFoundError("Tenant not found", resource="tenant", resource_id=tenant_id)
    return tenant


def count_tenant_products(db: Session, tenant_id: UUID) -> int:
    return db.query(func.count(Product.id)).filter(Product.tenant_id == tenant_id).scalar() or 0


def update_tenant(
    db: Session,
    tenant_id: UUID,
    company_name: Optional[str] = None,
    contact_person: Optional[str] = None,
    is_active: Optional[bool] = None
) -> Tenant:
    """Update tenant profile fields and active flag."""
    tenant = get_tenant(db, tenant_id)

    if company_name is not None:
        tenant.company_name = clean_required(company_name, "company_name")
    if contact_person is not None:
        tenant.contact_person = clean_required(contact_person, "contact_person")
    if is_active is not None:
        tenant.is_active = is_active

    tenant.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(tenant)

    logger.info(f"Tenant updated: {tenant.username}")
    return tenant


def reset_tenant_password(db: Session, tenant_id: UUID, new_password: str) -> Tenant:
    """Set a new password for a tenant without knowing the old one."""
    tenant = get_tenant(db, tenant_id)
    tenant.password_hash = hash_password(new_password)
    tenant.updated_at = datetime.utcnow()
    db.commit()

    logger.info(f"Password reset for tenant {tenant.username}")
    return tenant


def delete_tenant(db: Session, tenant_id: UUID) -> Dict[str, int]:
    """
    Delete a tenant with all of its orders and products.

    Every step runs in one transaction: on failure nothing is deleted.

    Returns:
        Counts of removed products and orders
    """
    tenant = get_tenant(db, tenant_id)
    username = tenant.username

    with transaction_scope(db):
        orders_removed = db.query(Order).filter(
            Order.tenant_id == tenant_id
        ).delete(synchronize_session=False)
        products_removed = db.query(Product).filter(
            Product.tenant_id == tenant_id
        ).delete(synchronize_session=False)
        db.query(Tenant).filter(Tenant.id == tenant_id).delete(synchronize_session=False)

    logger.info(
        f"Tenant deleted: {username} ({products_removed} products, {orders_removed} orders)"
    )
    return {"products_removed": products_removed, "orders_removed": orders_removed}


def get_stats(db: Session) -> Dict[str, int]:
    """Counts shown on the admin dashboard."""
    total_tenants = db.query(func.count(Tenant.id)).scalar()
    active_tenants = db.query(func.count(Tenant.id)).filter(Tenant.is_active == True).scalar()
    master_products = db.query(func.count(MasterProduct.id)).scalar()
    tenant_products = db.query(func.count(Product.id)).scalar()
    pending_orders = db.query(func.count(Order.id)).filter(Order.amount > 0).scalar()
    submitted_orders = db.query(func.count(Order.id)).filter(
        Order.last_submitted_amount.isnot(None)
    ).scalar()

    return {
        "total_tenants": total_tenants or 0,
        "active_tenants": active_tenants or 0,
        "master_products": master_products or 0,
        "tenant_products": tenant_products or 0,
        "pending_orders": pending_orders or 0,
        "submitted_orders": submitted_orders or 0,
    }


# Administrators

def create_admin(db: Session, username: str, password: str) -> AdminAccount:
    """
    Raises:
        ConflictError: If an administrator with this username exists
    """
    username = normalize_username(username)

    if db.query(AdminAccount).filter(AdminAccount.username == username).first():
        raise ConflictError("Username already exists", {"username": username})

    admin = AdminAccount(username=username, password_hash=hash_password(password))
    db.add(admin)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Username already exists", {"username": username})

    db.refresh(admin)
    logger.info(f"Admin created: {admin.username}")
    return admin


def ensure_default_admin(db: Session, username: str, password: str) -> bool:
    """
    Create the configured administrator if it does not exist yet.

    Safe to run on every start. When two processes race, the unique
    username constraint lets exactly one insert win.

    Returns:
        True if the administrator was created by this call
    """
    try:
        create_admin(db, username, password)
    except ConflictError:
        logger.debug(f"Default admin '{username}' already exists")
        return False

    logger.info(f"Default admin '{username}' created")
    return True
