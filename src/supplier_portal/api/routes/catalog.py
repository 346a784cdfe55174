"""
Master catalog routes (admin only).

Catalog entries are templates; assigning one to a tenant copies it into the
tenant's own product list.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from supplier_portal.api.middleware.auth_context import require_admin
from supplier_portal.api.schemas import (
    AssignmentEntry,
    AssignmentRequest,
    AssignmentResponse,
    MasterProductResponse,
    ProductCreateRequest,
    ProductDeleteResponse,
    ProductUpdateRequest,
    TenantSummary,
    UnassignResponse,
)
from supplier_portal.database.connection import get_db
from supplier_portal.database.models import AdminAccount
from supplier_portal.services import catalog_service

router = APIRouter()


@router.get("/products", response_model=List[MasterProductResponse])
def list_master_products(
    search: Optional[str] = Query(None, description="Match against SKU or name"),
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    return catalog_service.list_master_products(db, search=search)


@router.post("/products", response_model=MasterProductResponse, status_code=status.HTTP_201_CREATED)
def create_master_product(
    data: ProductCreateRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Add a product to the master catalog. SKUs are unique catalog-wide."""
    return catalog_service.create_master_product(
        db, sku=data.sku, name=data.name, price=data.price, unit=data.unit
    )


@router.get("/products/{product_id}", response_model=MasterProductResponse)
def get_master_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    return catalog_service.get_master_product(db, product_id)


@router.put("/products/{product_id}", response_model=MasterProductResponse)
def update_master_product(
    product_id: UUID,
    data: ProductUpdateRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Update a catalog entry. Copies already assigned to tenants keep their values."""
    return catalog_service.update_master_product(
        db, product_id, sku=data.sku, name=data.name, price=data.price, unit=data.unit
    )


@router.delete("/products/{product_id}", response_model=ProductDeleteResponse)
def delete_master_product(
    product_id: UUID,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Delete a catalog entry and every tenant copy made from it."""
    removed = catalog_service.delete_master_product(db, product_id)
    return ProductDeleteResponse(message="Master product deleted successfully", **removed)


@router.get("/products/{product_id}/assignments", response_model=List[AssignmentEntry])
def list_assignments(
    product_id: UUID,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Tenants currently holding a copy of this catalog entry."""
    return [
        AssignmentEntry(
            tenant=TenantSummary.model_validate(tenant),
            product_id=product.id,
            assigned_at=product.created_at
        )
        for tenant, product in catalog_service.list_assignments(db, product_id)
    ]


@router.post("/assign", response_model=AssignmentResponse)
def assign_products(
    data: AssignmentRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """
    Copy catalog products into tenants.

    Tenants that already have a product with the same SKU are skipped.
    The response lists the outcome of every (tenant, product) pair.
    """
    return catalog_service.assign_products(db, data.tenant_ids, data.product_ids)


@router.post("/unassign", response_model=UnassignResponse)
def unassign_products(
    data: AssignmentRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Remove tenant copies of catalog products, with their orders."""
    return catalog_service.unassign_products(db, data.tenant_ids, data.product_ids)
