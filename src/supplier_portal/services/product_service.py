"""
Tenant product management.

Tenants create, edit and delete their own products. Every query is filtered
by tenant id, so a product owned by someone else is simply "not found".
Also provides the cross-tenant product overview used by administrators.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from supplier_portal.database.models import Order, Product, Tenant
from supplier_portal.utils.config import get_config
from supplier_portal.utils.exceptions import ConflictError, NotFoundError, ProductLimitError
from supplier_portal.utils.logger import get_logger
from supplier_portal.utils.transaction import transaction_scope
from supplier_portal.utils.validation import clean_required

logger = get_logger(__name__)


def _sku_taken(db: Session, tenant_id: UUID, sku: str, exclude_id: Optional[UUID] = None) -> bool:
    query = db.query(Product.id).filter(Product.tenant_id == tenant_id, Product.sku == sku)
    if exclude_id is not None:
        query = query.filter(Product.id != exclude_id)
    return query.first() is not None


def list_products(db: Session, tenant_id: UUID) -> List[Product]:
    return db.query(Product).filter(Product.tenant_id == tenant_id).order_by(Product.sku).all()


def get_product(db: Session, tenant_id: UUID, product_id: UUID) -> Product:
    """
    Raises:
        NotFoundError: If the product does not exist or belongs to another tenant
    """
    product = db.query(Product).filter(
        Product.id == product_id,
        Product.tenant_id == tenant_id
    ).first()

    if not product:
        raise NotFoundError("Product not found", resource="product", resource_id=product_id)
    return product


def create_product(
    db: Session,
    tenant_id: UUID,
    sku: str,
    name: str,
    price: float,
    unit: str,
    max_products: Optional[int] = None
) -> Product:
    """
    Add a product to the tenant's own list.

    Raises:
        ValidationError: If the SKU, name or unit is blank
        ProductLimitError: If the tenant already owns the maximum number of products
        ConflictError: If the tenant already has a product with this SKU
    """
    limit = max_products or get_config().max_products_per_tenant
    sku = clean_required(sku, "sku", "SKU")

    product_count = db.query(func.count(Product.id)).filter(Product.tenant_id == tenant_id).scalar()
    if product_count >= limit:
        raise ProductLimitError(limit)

    if _sku_taken(db, tenant_id, sku):
        raise ConflictError(f"Product with SKU '{sku}' already exists", {"sku": sku})

    now = datetime.utcnow()
    product = Product(
        tenant_id=tenant_id,
        sku=sku,
        name=clean_required(name, "name"),
        price=price,
        unit=clean_required(unit, "unit"),
        created_at=now,
        last_updated=now
    )
    db.add(product)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Product with SKU '{sku}' already exists", {"sku": sku})

    db.refresh(product)
    logger.info(f"Tenant {tenant_id} added product {sku}")
    return product


def update_product(
    db: Session,
    tenant_id: UUID,
    product_id: UUID,
    sku: Optional[str] = None,
    name: Optional[str] = None,
    price: Optional[float] = None,
    unit: Optional[str] = None
) -> Product:
    """
    Update fields of a product the tenant owns.

    Raises:
        NotFoundError: If the product is not the tenant's
        ConflictError: If the new SKU is used by another of the tenant's products
    """
    product = get_product(db, tenant_id, product_id)

    if sku is not None:
        sku = clean_required(sku, "sku", "SKU")
        if sku != product.sku and _sku_taken(db, tenant_id, sku, exclude_id=product.id):
            raise ConflictError(f"Product with SKU '{sku}' already exists", {"sku": sku})
        product.sku = sku
    if name is not None:
        product.name = clean_required(name, "name")
    if price is not None:
        product.price = price
    if unit is not None:
        product.unit = clean_required(unit, "unit")

    product.last_updated = datetime.utcnow()

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Product with SKU '{sku}' already exists", {"sku": sku})

    db.refresh(product)
    logger.info(f"Tenant {tenant_id} updated product {product.sku}")
    return product


def delete_product(db: Session, tenant_id: UUID, product_id: UUID) -> None:
    """Delete a product the tenant owns together with its order."""
    product = get_product(db, tenant_id, product_id)
    sku = product.sku

    with transaction_scope(db):
        db.query(Order).filter(Order.product_id == product_id).delete(synchronize_session=False)
        db.query(Product).filter(Product.id == product_id).delete(synchronize_session=False)

    logger.info(f"Tenant {tenant_id} deleted product {sku}")


def cleanup_orphans(db: Session) -> Dict[str, int]:
    """
    Remove orders and products whose owner no longer exists.

    Returns:
        Counts of removed orders and products
    """
    with transaction_scope(db):
        orders_removed = db.query(Order).filter(
            Order.product_id.notin_(select(Product.id)) | Order.tenant_id.notin_(select(Tenant.id))
        ).delete(synchronize_session=False)
        products_removed = db.query(Product).filter(
            Product.tenant_id.notin_(select(Tenant.id))
        ).delete(synchronize_session=False)

    if orders_removed or products_removed:
        logger.warning(
            f"Removed orphaned records: {products_removed} products, {orders_removed} orders"
        )

    return {"orders_removed": orders_removed, "products_removed": products_removed}


def products_by_tenant(db: Session) -> List[Dict[str, Any]]:
    """
    All tenant products grouped by tenant, after an orphan cleanup pass.

    Tenants without products are omitted.

    Returns:
        List of {"tenant": Tenant, "products": [Product, ...]} ordered by company name
    """
    cleanup_orphans(db)

    rows = (
        db.query(Product, Tenant)
        .join(Tenant, Product.tenant_id == Tenant.id)
        .order_by(Tenant.company_name, Tenant.username, Product.sku)
        .all()
    )

    groups: Dict[UUID, Dict[str, Any]] = {}
    for product, tenant in rows:
        group = groups.setdefault(tenant.id, {"tenant": tenant, "products": []})
        group["products"].append(product)

    return list(groups.values())
