"""
Business logic for accounts, catalog, tenant products and orders.
"""
