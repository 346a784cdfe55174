"""
Custom exceptions for Supplier Portal.

Defines application-specific exception classes for validation failures,
conflicts, authentication and authorization problems and missing resources.
Each class carries the HTTP status code the API layer responds with.
"""

from typing import Optional, Dict, Any


class SupplierPortalError(Exception):
    """Base exception for all Supplier Portal errors."""

    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception with message and optional details.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(SupplierPortalError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(SupplierPortalError):
    """Raised when request data fails validation."""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None,
                 value: Optional[Any] = None):
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            value: Invalid value
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)

        super().__init__(message, details)
        self.field = field
        self.value = value


class ConflictError(SupplierPortalError):
    """Raised when a unique value (username, SKU) is already taken."""

    status_code = 400


class ProductLimitError(SupplierPortalError):
    """Raised when a tenant already owns the maximum number of products."""

    status_code = 400

    def __init__(self, limit: int):
        super().__init__(
            f"Maximum product limit ({limit}) reached. "
            "Please delete some products before adding new ones.",
            {"limit": limit}
        )
        self.limit = limit


class AuthenticationError(SupplierPortalError):
    """Raised when login credentials are rejected."""

    status_code = 400


class TokenMissingError(SupplierPortalError):
    """Raised when a protected route is called without a bearer token."""

    status_code = 401


class InvalidTokenError(SupplierPortalError):
    """Raised when a token is malformed, badly signed or expired."""

    status_code = 403


class AuthorizationError(SupplierPortalError):
    """Raised when the caller's role does not match the route."""

    status_code = 403


class NotFoundError(SupplierPortalError):
    """Raised when a requested resource does not exist for the caller."""

    status_code = 404

    def __init__(self, message: str, resource: Optional[str] = None,
                 resource_id: Optional[Any] = None):
        """
        Initialize not-found error.

        Args:
            message: Error message
            resource: Resource type that was looked up
            resource_id: Identifier that was not found
        """
        details = {}
        if resource:
            details["resource"] = resource
        if resource_id is not None:
            details["resource_id"] = str(resource_id)

        super().__init__(message, details)
        self.resource = resource
        self.resource_id = resource_id
