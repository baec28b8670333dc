"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Every record type shares the single Item table

Design Decisions:
    - Models imported here so Base.metadata is complete before create_all or alembic
"""

from imagix.models.item import Item  # noqa: F401
