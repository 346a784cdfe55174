"""
Tenant product routes.

Every route is scoped to the authenticated tenant; products of other tenants
are reported as not found.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from supplier_portal.api.middleware.auth_context import require_tenant
from supplier_portal.api.schemas import (
    MessageResponse,
    ProductCreateRequest,
    ProductResponse,
    ProductUpdateRequest,
)
from supplier_portal.database.connection import get_db
from supplier_portal.database.models import Tenant
from supplier_portal.services import product_service

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
def list_products(
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    """Products of the current tenant, sorted by SKU."""
    return product_service.list_products(db, tenant.id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreateRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    """
    Add a product.

    Fails with 400 when the SKU is already used by this tenant or the
    product limit is reached.
    """
    return product_service.create_product(
        db, tenant.id, sku=data.sku, name=data.name, price=data.price, unit=data.unit
    )


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    return product_service.get_product(db, tenant.id, product_id)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: UUID,
    data: ProductUpdateRequest,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    return product_service.update_product(
        db, tenant.id, product_id,
        sku=data.sku, name=data.name, price=data.price, unit=data.unit
    )


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    tenant: Tenant = Depends(require_tenant)
):
    product_service.delete_product(db, tenant.id, product_id)
    return MessageResponse(message="Product deleted successfully")
