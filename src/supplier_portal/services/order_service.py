"""
Order drafts and submission.

A tenant keeps one order per product: a draft amount it is still editing and
the amount it last submitted. Submitting moves every positive draft into
"last submitted" with one shared timestamp and resets the draft to zero.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from supplier_portal.database.models import Order, Product, Tenant
from supplier_portal.services.product_service import get_product
from supplier_portal.utils.exceptions import ValidationError
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)


def list_tenant_orders(db: Session, tenant_id: UUID) -> List[Tuple[Product, Optional[Order]]]:
    """Every product of the tenant with its order, if one exists."""
    return (
        db.query(Product, Order)
        .outerjoin(Order, (Order.product_id == Product.id) & (Order.tenant_id == tenant_id))
        .filter(Product.tenant_id == tenant_id)
        .order_by(Product.sku)
        .all()
    )


def set_draft_amount(db: Session, tenant_id: UUID, product_id: UUID, amount: float) -> Tuple[Product, Order]:
    """
    Create or update the draft amount for one of the tenant's products.

    Raises:
        NotFoundError: If the product is not the tenant's
        ValidationError: If the amount is negative
    """
    if amount is None or amount < 0:
        raise ValidationError("Amount must be zero or positive", field="amount", value=amount)

    product = get_product(db, tenant_id, product_id)

    order = db.query(Order).filter(
        Order.tenant_id == tenant_id,
        Order.product_id == product_id
    ).first()

    if order is None:
        order = Order(tenant_id=tenant_id, product_id=product_id, amount=amount)
        db.add(order)
        try:
            db.commit()
        except IntegrityError:
            # Another request created the order first, update that one
            db.rollback()
            order = db.query(Order).filter(
                Order.tenant_id == tenant_id,
                Order.product_id == product_id
            ).one()
            order.amount = amount
            db.commit()
    else:
        order.amount = amount
        order.updated_at = datetime.utcnow()
        db.commit()

    db.refresh(order)
    logger.debug(f"Tenant {tenant_id} set draft {amount} for {product.sku}")
    return product, order


def submit_all(db: Session, tenant_id: UUID) -> Dict[str, Any]:
    """
    Submit every positive draft of the tenant.

    Each order is committed separately; a failing item is reported and the
    rest continue.

    Returns:
        {"submitted": int, "failed": int, "submitted_at": datetime, "results": [...]}
    """
    submitted_at = datetime.utcnow()

    drafts = (
        db.query(Order, Product.sku)
        .join(Product, Product.id == Order.product_id)
        .filter(Order.tenant_id == tenant_id, Order.amount > 0)
        .order_by(Product.sku)
        .all()
    )

    results = []
    submitted = failed = 0

    for order, sku in drafts:
        product_id = order.product_id
        amount = order.amount

        try:
            order.last_submitted_amount = amount
            order.last_submitted_at = submitted_at
            order.amount = 0.0
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            failed += 1
            logger.error(f"Failed to submit order for {sku} (tenant {tenant_id}): {e}")
            results.append({
                "product_id": product_id,
                "sku": sku,
                "amount": amount,
                "status": "failed",
                "error": str(e),
            })
            continue

        submitted += 1
        results.append({
            "product_id": product_id,
            "sku": sku,
            "amount": amount,
            "status": "submitted",
            "error": None,
        })

    logger.info(f"Tenant {tenant_id} submitted {submitted} orders ({failed} failed)")

    return {
        "submitted": submitted,
        "failed": failed,
        "submitted_at": submitted_at,
        "results": results,
    }


def orders_by_tenant(db: Session, submitted_only: bool = False) -> List[Dict[str, Any]]:
    """
    Products joined with their orders, grouped by tenant.

    Args:
        submitted_only: Only include products that have been submitted at least once

    Returns:
        List of {"tenant": Tenant, "items": [(Product, Order | None), ...]}
    """
    query = (
        db.query(Tenant, Product, Order)
        .join(Product, Product.tenant_id == Tenant.id)
        .outerjoin(Order, (Order.product_id == Product.id) & (Order.tenant_id == Tenant.id))
    )
    if submitted_only:
        query = query.filter(Order.last_submitted_amount.isnot(None))

    rows = query.order_by(Tenant.company_name, Tenant.username, Product.sku).all()

    groups: Dict[UUID, Dict[str, Any]] = {}
    for tenant, product, order in rows:
        group = groups.setdefault(tenant.id, {"tenant": tenant, "items": []})
        group["items"].append((product, order))

    return list(groups.values())
