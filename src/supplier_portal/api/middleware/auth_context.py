"""
Authorization dependencies: extract the caller from the bearer token and
enforce the role a route requires.
"""

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from supplier_portal.auth import Principal, Role, get_jwt_manager
from supplier_portal.database.connection import get_db
from supplier_portal.database.models import AdminAccount, Tenant
from supplier_portal.services.account_service import load_account
from supplier_portal.utils.exceptions import AuthorizationError, InvalidTokenError, TokenMissingError
from supplier_portal.utils.logger import get_logger

logger = get_logger(__name__)

# Missing credentials are reported by get_current_principal, not by FastAPI
security = HTTPBearer(auto_error=False)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> Principal:
    """
    Dependency returning the authenticated caller.

    Usage:
        @router.get("/me")
        def me(principal: Principal = Depends(get_current_principal)):
            return {"role": principal.role}

    Raises:
        TokenMissingError: No bearer token (401)
        InvalidTokenError: Bad signature, malformed or expired token (403)
    """
    if credentials is None or not credentials.credentials:
        raise TokenMissingError("Access denied. No token provided.")

    try:
        return get_jwt_manager().decode_principal(credentials.credentials)
    except JWTError:
        raise InvalidTokenError("Invalid token.")


def require_admin(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
) -> AdminAccount:
    """Ensure the caller is an administrator and return its account."""
    if principal.role is not Role.ADMIN:
        logger.warning(f"{principal.role.value} {principal.username} denied admin route")
        raise AuthorizationError("Access denied")
    return load_account(db, principal)


def require_tenant(
    principal: Principal = Depends(get_current_principal),
    db: Session = Depends(get_db)
) -> Tenant:
    """Ensure the caller is an active tenant and return its account."""
    if principal.role is not Role.TENANT:
        logger.warning(f"{principal.role.value} {principal.username} denied tenant route")
        raise AuthorizationError("Access denied")

    tenant = load_account(db, principal)
    if not tenant.is_active:
        raise AuthorizationError("Tenant account is disabled")
    return tenant
