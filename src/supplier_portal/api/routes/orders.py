"""
Tenant order routes: draft amounts per product and submit-all.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from supplier_portal.api.middleware.auth_context import require_tenant
from supplier_portal.api.schemas import DraftAmountRequest, OrderItemResponse, SubmitResponse
from supplier_portal.database.connection import get_db
from supplier_portal.database.models import Tenant
from supplier_portal.services import order_service

router = APIRouter()


@router.get("", response_model=List[OrderItemResponse])
def list_orders(
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    """Every product of the tenant with its draft and last submitted amounts."""
    return [
        OrderItemResponse.from_pair(product, order)
        for product, order in order_service.list_tenant_orders(db, tenant.id)
    ]


@router.put("/{product_id}", response_model=OrderItemResponse)
def set_draft_amount(
    product_id: UUID,
    data: DraftAmountRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    """Create or update the draft amount for one product."""
    product, order = order_service.set_draft_amount(db, tenant.id, product_id, data.amount)
    return OrderItemResponse.from_pair(product, order)


@router.post("/submit", response_model=SubmitResponse)
def submit_orders(
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    """Submit every draft above zero. Drafts are reset to zero afterwards."""
    return order_service.submit_all(db, tenant.id)
