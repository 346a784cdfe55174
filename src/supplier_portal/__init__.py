"""
Supplier Portal

Multi-tenant product catalog and ordering backend. Suppliers and customers
manage their own product lists and submit order amounts, while an administrator
maintains tenant accounts and a master catalog that can be assigned to tenants.
"""

__version__ = "1.0.0"
__author__ = "Supplier Portal Team"
