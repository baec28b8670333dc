"""Database Metadata — the SQLAlchemy declarative Base shared by models and alembic.

Invariants:
    - One Base, one metadata; the item table is its only table
"""
