"""Item ORM — the single shared table every record type is stored in.

Invariants:
    - (pk, sk) is the composite primary key
    - item_type discriminates the record type; data holds the record as JSON
    - gsi1pk/gsi1sk form the one secondary index (owner lookups); NULL when unused

Design Decisions:
    - Table name from settings (TABLE_NAME) so local and test stores can be isolated
    - JSON data column over typed columns: the storage adapter owns the translation,
      the schema never changes when a record gains a field
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from imagix.config import get_settings
from imagix.db.base import Base

TABLE_NAME = get_settings().table_name


class Item(Base):
    """One stored item of any type."""
    __tablename__ = TABLE_NAME
    __table_args__ = (
        Index(f"ix_{TABLE_NAME}_gsi1", "gsi1pk", "gsi1sk"),
    )

    pk: Mapped[str] = mapped_column(String(128), primary_key=True)
    sk: Mapped[str] = mapped_column(String(128), primary_key=True)
    item_type: Mapped[str] = mapped_column(String(20), nullable=False)
    gsi1pk: Mapped[str | None] = mapped_column(String(128), nullable=True)
    gsi1sk: Mapped[str | None] = mapped_column(String(128), nullable=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
