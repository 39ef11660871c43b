"""006: create upi_handlers table

Revision ID: 006
Revises: 005
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "006"
down_revision: Union[str, None] = "005"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE upi_handlers (
            id          VARCHAR(32)     PRIMARY KEY,
            name        VARCHAR(64)     NOT NULL,
            created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_upi_handlers_name UNIQUE (name)
        );
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS upi_handlers CASCADE;")
