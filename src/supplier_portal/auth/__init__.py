"""
Authentication utilities for Supplier Portal.
"""

from .jwt_manager import JWTManager, create_access_token, get_jwt_manager, verify_token
from .password import PasswordManager, hash_password, verify_password
from .principal import Principal, Role

__all__ = [
    "JWTManager",
    "create_access_token",
    "get_jwt_manager",
    "verify_token",
    "PasswordManager",
    "hash_password",
    "verify_password",
    "Principal",
    "Role",
]
