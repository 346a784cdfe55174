"""
Shared utilities: configuration, logging, exceptions, transactions.
"""
