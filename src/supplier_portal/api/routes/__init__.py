"""
API route modules.
"""

from . import admin, auth, catalog, health, orders, products

__all__ = ["admin", "auth", "catalog", "health", "orders", "products"]
