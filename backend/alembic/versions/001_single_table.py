"""Single item table — every record type in one pk/sk table with one secondary index.

Revision ID: 001_single_table
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from imagix.config import get_settings

revision: str = "001_single_table"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

TABLE_NAME = get_settings().table_name


def upgrade() -> None:
    op.create_table(
        TABLE_NAME,
        sa.Column("pk", sa.String(128), primary_key=True),
        sa.Column("sk", sa.String(128), primary_key=True),
        sa.Column("item_type", sa.String(20), nullable=False),
        sa.Column("gsi1pk", sa.String(128), nullable=True),
        sa.Column("gsi1sk", sa.String(128), nullable=True),
        sa.Column("data", sa.JSON, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index(f"ix_{TABLE_NAME}_gsi1", TABLE_NAME, ["gsi1pk", "gsi1sk"])


def downgrade() -> None:
    op.drop_index(f"ix_{TABLE_NAME}_gsi1", table_name=TABLE_NAME)
    op.drop_table(TABLE_NAME)
