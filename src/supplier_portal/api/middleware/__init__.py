"""
FastAPI middleware components and authorization dependencies.
"""

from .auth_context import get_current_principal, require_admin, require_tenant
from .error_handler import ErrorHandlerMiddleware, register_exception_handlers

__all__ = [
    "get_current_principal",
    "require_admin",
    "require_tenant",
    "ErrorHandlerMiddleware",
    "register_exception_handlers",
]
