"""
SQLAlchemy database models for Supplier Portal.

Models:
- AdminAccount: Administrator credentials
- Tenant: Supplier/customer accounts owning products and orders
- MasterProduct: Admin-managed catalog entries
- Product: Tenant-scoped product copies
- Order: Per-tenant, per-product draft and submitted amounts
"""

from .base import Base
from .admin import AdminAccount
from .tenant import Tenant
from .master_product import MasterProduct
from .product import Product
from .order import Order

__all__ = [
    "Base",
    "AdminAccount",
    "Tenant",
    "MasterProduct",
    "Product",
    "Order",
]
