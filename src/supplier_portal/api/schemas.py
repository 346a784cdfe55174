"""
Pydantic schemas for API request/response validation.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from supplier_portal.auth import Role


# Auth schemas
class LoginRequest(BaseModel):
    """Login request for either account type."""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class AccountProfile(BaseModel):
    """Identity of the logged-in account."""
    id: UUID
    username: str
    role: Role
    company_name: Optional[str] = None
    contact_person: Optional[str] = None


class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    account: AccountProfile


class PasswordChangeRequest(BaseModel):
    """Change own password."""
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)


class PasswordResetRequest(BaseModel):
    """Admin sets a tenant password."""
    new_password: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


# Tenant schemas
class TenantCreateRequest(BaseModel):
    """Tenant account creation (signup or by admin)."""
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    company_name: str = Field(..., min_length=1, max_length=255)
    contact_person: str = Field(..., min_length=1, max_length=255)


class TenantUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    company_name: Optional[str] = Field(None, min_length=1, max_length=255)
    contact_person: Optional[str] = Field(None, min_length=1, max_length=255)
    is_active: Optional[bool] = None


class TenantSummary(BaseModel):
    """Tenant fields shown next to grouped products and orders."""
    id: UUID
    username: str
    company_name: str
    contact_person: str

    class Config:
        from_attributes = True


class TenantResponse(TenantSummary):
    """Tenant account details. Never includes the password hash."""
    is_active: bool
    created_at: datetime
    last_login_at: Optional[datetime] = None
    product_count: int = 0


class TenantListResponse(BaseModel):
    tenants: List[TenantResponse]
    count: int


class TenantDeleteResponse(BaseModel):
    message: str
    products_removed: int
    orders_removed: int


class StatsResponse(BaseModel):
    """Admin dashboard statistics."""
    total_tenants: int
    active_tenants: int
    master_products: int
    tenant_products: int
    pending_orders: int
    submitted_orders: int


# Product schemas
class ProductCreateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    sku: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=500)
    price: float = Field(..., ge=0, allow_inf_nan=False)
    unit: str = Field(..., min_length=1, max_length=50)


class ProductUpdateRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    sku: Optional[str] = Field(None, min_length=1, max_length=100)
    name: Optional[str] = Field(None, min_length=1, max_length=500)
    price: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    unit: Optional[str] = Field(None, min_length=1, max_length=50)


class MasterProductResponse(BaseModel):
    id: UUID
    sku: str
    name: str
    price: float
    unit: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    """Tenant product."""
    id: UUID
    sku: str
    name: str
    price: float
    unit: str
    master_product_id: Optional[UUID] = None
    created_at: datetime
    last_updated: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProductDeleteResponse(BaseModel):
    message: str
    products_removed: int
    orders_removed: int


class TenantProductsGroup(BaseModel):
    tenant: TenantSummary
    products: List[ProductResponse]


# Assignment schemas
class AssignmentRequest(BaseModel):
    tenant_ids: List[UUID] = Field(..., min_length=1)
    product_ids: List[UUID] = Field(..., min_length=1)


class AssignmentDetail(BaseModel):
    tenant_id: UUID
    product_id: UUID
    sku: Optional[str] = None
    status: str
    error: Optional[str] = None


class AssignmentResponse(BaseModel):
    assigned: int
    skipped: int
    errors: int
    details: List[AssignmentDetail]


class UnassignResponse(BaseModel):
    removed: int
    orders_removed: int


class AssignmentEntry(BaseModel):
    """Tenant holding a copy of a master product."""
    tenant: TenantSummary
    product_id: UUID
    assigned_at: datetime


# Order schemas
class DraftAmountRequest(BaseModel):
    amount: float = Field(..., ge=0, allow_inf_nan=False)


class OrderItemResponse(BaseModel):
    """Product joined with its order state."""
    product_id: UUID
    sku: str
    name: str
    price: float
    unit: str
    draft_amount: float = 0.0
    last_submitted_amount: Optional[float] = None
    last_submitted_at: Optional[datetime] = None

    @classmethod
    def from_pair(cls, product, order) -> "OrderItemResponse":
        return cls(
            product_id=product.id,
            sku=product.sku,
            name=product.name,
            price=product.price,
            unit=product.unit,
            draft_amount=order.amount if order else 0.0,
            last_submitted_amount=order.last_submitted_amount if order else None,
            last_submitted_at=order.last_submitted_at if order else None,
        )


class SubmitItemResult(BaseModel):
    product_id: UUID
    sku: str
    amount: float
    status: str
    error: Optional[str] = None


class SubmitResponse(BaseModel):
    submitted: int
    failed: int
    submitted_at: datetime
    results: List[SubmitItemResult]


class TenantOrdersGroup(BaseModel):
    tenant: TenantSummary
    items: List[OrderItemResponse]
