"""
HTTP API for Supplier Portal.
"""
