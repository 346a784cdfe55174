"""
Master catalog management and assignment of catalog products to tenants.

Assignment copies a master product into a tenant-scoped product. A tenant
that already holds a product with the same SKU is skipped, never
overwritten. Each (tenant, product) pair is committed on its own so one
failing pair does not undo the others; the outcome of every pair is
reported back to the caller.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from supplier_portal.database.models import MasterProduct, Order, Product, Tenant
from supplier_portal.utils.exceptions import ConflictError, NotFoundError, ValidationError
from supplier_portal.utils.logger import get_logger
from supplier_portal.utils.transaction import transaction_scope
from supplier_portal.utils.validation import clean_required

logger = get_logger(__name__)

STATUS_ASSIGNED = "assigned"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"


def _unique(ids: Iterable[UUID]) -> List[UUID]:
    """Drop repeated ids, keeping first-seen order."""
    seen = set()
    result = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


# Master product CRUD

def list_master_products(db: Session, search: Optional[str] = None) -> List[MasterProduct]:
    query = db.query(MasterProduct)
    if search:
        pattern = f"%{search}%"
        query = query.filter(MasterProduct.sku.ilike(pattern) | MasterProduct.name.ilike(pattern))
    return query.order_by(MasterProduct.sku).all()


def get_master_product(db: Session, product_id: UUID) -> MasterProduct:
    """
    Raises:
        NotFoundError: If the catalog entry does not exist
    """
    product = db.query(MasterProduct).filter(MasterProduct.id == product_id).first()
    if not product:
        raise NotFoundError("Master product not found", resource="master_product", resource_id=product_id)
    return product


def create_master_product(db: Session, sku: str, name: str, price: float, unit: str) -> MasterProduct:
    """
    Raises:
        ConflictError: If the SKU already exists in the catalog
    """
    sku = clean_required(sku, "sku", "SKU")

    if db.query(MasterProduct.id).filter(MasterProduct.sku == sku).first():
        raise ConflictError(f"Master product with SKU '{sku}' already exists", {"sku": sku})

    product = MasterProduct(
        sku=sku,
        name=clean_required(name, "name"),
        price=price,
        unit=clean_required(unit, "unit")
    )
    db.add(product)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Master product with SKU '{sku}' already exists", {"sku": sku})

    db.refresh(product)
    logger.info(f"Master product created: {product.sku}")
    return product


def update_master_product(
    db: Session,
    product_id: UUID,
    sku: Optional[str] = None,
    name: Optional[str] = None,
    price: Optional[float] = None,
    unit: Optional[str] = None
) -> MasterProduct:
    """
    Update a catalog entry. Tenant copies made earlier are left as they are.

    Raises:
        ConflictError: If the new SKU belongs to another catalog entry
    """
    product = get_master_product(db, product_id)

    if sku is not None:
        sku = clean_required(sku, "sku", "SKU")
        duplicate = db.query(MasterProduct.id).filter(
            MasterProduct.sku == sku,
            MasterProduct.id != product_id
        ).first()
        if duplicate:
            raise ConflictError(f"Master product with SKU '{sku}' already exists", {"sku": sku})
        product.sku = sku
    if name is not None:
        product.name = clean_required(name, "name")
    if price is not None:
        product.price = price
    if unit is not None:
        product.unit = clean_required(unit, "unit")

    product.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(product)

    logger.info(f"Master product updated: {product.sku}")
    return product


def delete_master_product(db: Session, product_id: UUID) -> Dict[str, int]:
    """
    Delete a catalog entry along with every tenant copy and their orders.

    Returns:
        Counts of removed tenant products and orders
    """
    product = get_master_product(db, product_id)
    sku = product.sku

    with transaction_scope(db):
        copy_ids = [
            row.id for row in
            db.query(Product.id).filter(Product.master_product_id == product_id).all()
        ]
        orders_removed = 0
        if copy_ids:
            orders_removed = db.query(Order).filter(
                Order.product_id.in_(copy_ids)
            ).delete(synchronize_session=False)
            db.query(Product).filter(Product.id.in_(copy_ids)).delete(synchronize_session=False)
        db.query(MasterProduct).filter(MasterProduct.id == product_id).delete(synchronize_session=False)

    logger.info(
        f"Master product deleted: {sku} ({len(copy_ids)} tenant copies, {orders_removed} orders)"
    )
    return {"products_removed": len(copy_ids), "orders_removed": orders_removed}


# Assignment

def _detail(tenant_id: UUID, product_id: UUID, status: str,
            sku: Optional[str] = None, error: Optional[str] = None) -> Dict[str, Any]:
    return {
        "tenant_id": tenant_id,
        "product_id": product_id,
        "sku": sku,
        "status": status,
        "error": error,
    }


def assign_products(db: Session, tenant_ids: Iterable[UUID], product_ids: Iterable[UUID]) -> Dict[str, Any]:
    """
    Copy master products into every given tenant.

    Args:
        tenant_ids: Tenants receiving the products
        product_ids: Master products to copy

    Returns:
        {"assigned": int, "skipped": int, "errors": int, "details": [...]}
    """
    tenant_ids = _unique(tenant_ids)
    product_ids = _unique(product_ids)

    if not tenant_ids or not product_ids:
        raise ValidationError("At least one tenant and one product are required")

    tenants = {t.id: t for t in db.query(Tenant).filter(Tenant.id.in_(tenant_ids)).all()}
    masters = {
        m.id: (m.sku, m.name, m.price, m.unit)
        for m in db.query(MasterProduct).filter(MasterProduct.id.in_(product_ids)).all()
    }

    counts = {STATUS_ASSIGNED: 0, STATUS_SKIPPED: 0, STATUS_ERROR: 0}
    details = []

    for tenant_id in tenant_ids:
        for product_id in product_ids:
            if tenant_id not in tenants:
                outcome = _detail(tenant_id, product_id, STATUS_ERROR, error="Tenant not found")
            elif product_id not in masters:
                outcome = _detail(tenant_id, product_id, STATUS_ERROR, error="Master product not found")
            else:
                outcome = _assign_one(db, tenant_id, product_id, *masters[product_id])

            counts[outcome["status"]] += 1
            details.append(outcome)

    logger.info(
        f"Assignment finished: {counts[STATUS_ASSIGNED]} assigned, "
        f"{counts[STATUS_SKIPPED]} skipped, {counts[STATUS_ERROR]} errors"
    )

    return {
        "assigned": counts[STATUS_ASSIGNED],
        "skipped": counts[STATUS_SKIPPED],
        "errors": counts[STATUS_ERROR],
        "details": details,
    }


def _assign_one(db: Session, tenant_id: UUID, master_id: UUID,
                sku: str, name: str, price: float, unit: str) -> Dict[str, Any]:
    """Copy one master product into one tenant and commit."""
    existing = db.query(Product.id).filter(
        Product.tenant_id == tenant_id,
        Product.sku == sku
    ).first()
    if existing:
        return _detail(tenant_id, master_id, STATUS_SKIPPED, sku=sku)

    now = datetime.utcnow()
    db.add(Product(
        tenant_id=tenant_id,
        master_product_id=master_id,
        sku=sku,
        name=name,
        price=price,
        unit=unit,
        created_at=now,
        last_updated=now
    ))

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        inserted_concurrently = db.query(Product.id).filter(
            Product.tenant_id == tenant_id,
            Product.sku == sku
        ).first()
        if inserted_concurrently:
            return _detail(tenant_id, master_id, STATUS_SKIPPED, sku=sku)
        logger.error(f"Failed to assign {sku} to tenant {tenant_id}: {e}")
        return _detail(tenant_id, master_id, STATUS_ERROR, sku=sku, error=str(e.orig))
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to assign {sku} to tenant {tenant_id}: {e}")
        return _detail(tenant_id, master_id, STATUS_ERROR, sku=sku, error=str(e))

    return _detail(tenant_id, master_id, STATUS_ASSIGNED, sku=sku)


def unassign_products(db: Session, tenant_ids: Iterable[UUID], product_ids: Iterable[UUID]) -> Dict[str, int]:
    """
    Remove tenant copies of the given master products, with their orders.

    Products a tenant created itself are never touched, even if the SKU matches.

    Returns:
        Counts of removed tenant products and orders
    """
    tenant_ids = _unique(tenant_ids)
    product_ids = _unique(product_ids)

    if not tenant_ids or not product_ids:
        raise ValidationError("At least one tenant and one product are required")

    with transaction_scope(db):
        copy_ids = [
            row.id for row in
            db.query(Product.id).filter(
                Product.tenant_id.in_(tenant_ids),
                Product.master_product_id.in_(product_ids)
            ).all()
        ]
        orders_removed = 0
        if copy_ids:
            orders_removed = db.query(Order).filter(
                Order.product_id.in_(copy_ids)
            ).delete(synchronize_session=False)
            db.query(Product).filter(Product.id.in_(copy_ids)).delete(synchronize_session=False)

    logger.info(f"Unassigned {len(copy_ids)} tenant products ({orders_removed} orders)")
    return {"removed": len(copy_ids), "orders_removed": orders_removed}


def list_assignments(db: Session, product_id: UUID) -> List[Tuple[Tenant, Product]]:
    """Tenants holding a copy of the master product."""
    get_master_product(db, product_id)

    return (
        db.query(Tenant, Product)
        .join(Product, Product.tenant_id == Tenant.id)
        .filter(Product.master_product_id == product_id)
        .order_by(Tenant.company_name)
        .all()
    )
