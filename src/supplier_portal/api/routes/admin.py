"""
Admin panel routes for tenant accounts, statistics and cross-tenant views.
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from supplier_portal.api.middleware.auth_context import require_admin
from supplier_portal.api.schemas import (
    MessageResponse,
    OrderItemResponse,
    PasswordResetRequest,
    ProductResponse,
    StatsResponse,
    TenantCreateRequest,
    TenantDeleteResponse,
    TenantListResponse,
    TenantOrdersGroup,
    TenantProductsGroup,
    TenantResponse,
    TenantSummary,
    TenantUpdateRequest,
)
from supplier_portal.database.connection import get_db
from supplier_portal.database.models import AdminAccount, Tenant
from supplier_portal.services import account_service, order_service, product_service
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _tenant_response(tenant: Tenant, product_count: int) -> TenantResponse:
    return TenantResponse(
        id=tenant.id,
        username=tenant.username,
        company_name=tenant.company_name,
        contact_person=tenant.contact_person,
        is_active=tenant.is_active,
        created_at=tenant.created_at,
        last_login_at=tenant.last_login_at,
        product_count=product_count
    )


@router.post("/tenants", response_model=TenantResponse, status_code=status.HTTP_201_CREATED)
def create_tenant(
    data: TenantCreateRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Create a tenant account."""
    tenant = account_service.create_tenant(
        db,
        username=data.username,
        password=data.password,
        company_name=data.company_name,
        contact_person=data.contact_person
    )
    logger.info(f"Admin {admin.username} created tenant {tenant.username}")
    return _tenant_response(tenant, 0)


@router.get("/tenants", response_model=TenantListResponse)
def list_tenants(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """All tenant accounts with their product counts."""
    tenants = [
        _tenant_response(tenant, count)
        for tenant, count in account_service.list_tenants(db)
    ]
    return TenantListResponse(tenants=tenants, count=len(tenants))


@router.get("/tenants/{tenant_id}", response_model=TenantResponse)
def get_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    tenant = account_service.get_tenant(db, tenant_id)
    return _tenant_response(tenant, account_service.count_tenant_products(db, tenant_id))


@router.patch("/tenants/{tenant_id}", response_model=TenantResponse)
def update_tenant(
    tenant_id: UUID,
    data: TenantUpdateRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Update tenant profile fields or (de)activate the account."""
    tenant = account_service.update_tenant(
        db,
        tenant_id,
        company_name=data.company_name,
        contact_person=data.contact_person,
        is_active=data.is_active
    )
    return _tenant_response(tenant, account_service.count_tenant_products(db, tenant_id))


@router.put("/tenants/{tenant_id}/password", response_model=MessageResponse)
def reset_tenant_password(
    tenant_id: UUID,
    data: PasswordResetRequest,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    tenant = account_service.reset_tenant_password(db, tenant_id, data.new_password)
    logger.info(f"Admin {admin.username} reset password of tenant {tenant.username}")
    return MessageResponse(message="Password reset successfully")


@router.delete("/tenants/{tenant_id}", response_model=TenantDeleteResponse)
def delete_tenant(
    tenant_id: UUID,
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Delete a tenant together with all of its products and orders."""
    removed = account_service.delete_tenant(db, tenant_id)
    logger.info(f"Admin {admin.username} deleted tenant {tenant_id}")
    return TenantDeleteResponse(
        message="Tenant and all their products deleted successfully",
        **removed
    )


@router.get("/stats", response_model=StatsResponse)
def get_admin_stats(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Overview of tenants, catalog, products and orders."""
    return StatsResponse(**account_service.get_stats(db))


@router.get("/products", response_model=List[TenantProductsGroup])
def products_by_tenant(
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """All tenant products grouped by tenant."""
    return [
        TenantProductsGroup(
            tenant=TenantSummary.model_validate(group["tenant"]),
            products=[ProductResponse.model_validate(p) for p in group["products"]]
        )
        for group in product_service.products_by_tenant(db)
    ]


@router.get("/orders", response_model=List[TenantOrdersGroup])
def orders_by_tenant(
    submitted_only: bool = Query(False, description="Only products that were submitted at least once"),
    db: Session = Depends(get_db),
    admin: AdminAccount = Depends(require_admin)
):
    """Products with their last submitted amounts, grouped by tenant."""
    return [
        TenantOrdersGroup(
            tenant=TenantSummary.model_validate(group["tenant"]),
            items=[OrderItemResponse.from_pair(product, order) for product, order in group["items"]]
        )
        for group in order_service.orders_by_tenant(db, submitted_only=submitted_only)
    ]
