"""
Database layer: engine, sessions and SQLAlchemy models.
"""
