"""
Authentication routes: login per role, tenant signup, identity and password change.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from supplier_portal.api.middleware.auth_context import get_current_principal
from supplier_portal.api.schemas import (
    AccountProfile,
    LoginRequest,
    MessageResponse,
    PasswordChangeRequest,
    TenantCreateRequest,
    TokenResponse,
)
from supplier_portal.auth import Principal, Role, get_jwt_manager
from supplier_portal.database.connection import get_db
from supplier_portal.services import account_service
from supplier_portal.utils.config import get_config
from supplier_portal.utils.exceptions import AuthorizationError
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def _profile(account, role: Role) -> AccountProfile:
    if role is Role.TENANT:
        return AccountProfile(
            id=account.id,
            username=account.username,
            role=role,
            company_name=account.company_name,
            contact_person=account.contact_person
        )
    return AccountProfile(id=account.id, username=account.username, role=role)


def _token_response(account, role: Role) -> TokenResponse:
    jwt_manager = get_jwt_manager()
    token = jwt_manager.create_access_token(
        account_id=str(account.id),
        username=account.username,
        role=role
    )
    return TokenResponse(
        access_token=token,
        expires_in=jwt_manager.expires_in,
        account=_profile(account, role)
    )


@router.post("/admin/login", response_model=TokenResponse)
def admin_login(data: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate an administrator and return a token."""
    admin = account_service.authenticate_admin(db, data.username, data.password)
    return _token_response(admin, Role.ADMIN)


@router.post("/tenant/login", response_model=TokenResponse)
def tenant_login(data: LoginRequest, db: Session = Depends(get_db)):
    """Authenticate a tenant and return a token."""
    tenant = account_service.authenticate_tenant(db, data.username, data.password)
    return _token_response(tenant, Role.TENANT)


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(data: TenantCreateRequest, db: Session = Depends(get_db)):
    """
    Self-service tenant registration.

    Disabled when ALLOW_SIGNUP is false; accounts are then created by admins only.
    """
    if not get_config().allow_signup:
        raise AuthorizationError("Self-service signup is disabled")

    tenant = account_service.create_tenant(
        db,
        username=data.username,
        password=data.password,
        company_name=data.company_name,
        contact_person=data.contact_person
    )
    logger.info(f"New tenant signed up: {tenant.username}")
    return _token_response(tenant, Role.TENANT)


@router.get("/me", response_model=AccountProfile)
def me(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Identity of the token holder."""
    account = account_service.load_account(db, principal)
    return _profile(account, principal.role)


@router.put("/password", response_model=MessageResponse)
def change_password(
    data: PasswordChangeRequest,
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
):
    """Change the caller's own password."""
    account_service.change_password(db, principal, data.current_password, data.new_password)
    return MessageResponse(message="Password changed successfully")
