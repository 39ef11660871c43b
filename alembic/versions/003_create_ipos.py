"""003: create ipos table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Money columns are whole rupees
    op.execute("""
        CREATE TABLE ipos (
            id               VARCHAR(32)     PRIMARY KEY,
            name             VARCHAR(200)    NOT NULL,
            category         VARCHAR(16)     NOT NULL,
            status           VARCHAR(16)     NOT NULL DEFAULT 'Upcoming',
            price_band_min   BIGINT          NOT NULL,
            price_band_max   BIGINT          NOT NULL,
            lot_size         INTEGER         NOT NULL,
            retail_max_lot   INTEGER         NOT NULL,
            hni_max_amount   BIGINT          NOT NULL,
            open_date        DATE,
            close_date       DATE,
            created_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_ipos_category   CHECK (category IN ('Mainboard', 'SME')),
            CONSTRAINT ck_ipos_status     CHECK (status IN ('Upcoming', 'Active', 'Closed')),
            CONSTRAINT ck_ipos_band       CHECK (price_band_min >= 0 AND price_band_min <= price_band_max),
            CONSTRAINT ck_ipos_lot_size   CHECK (lot_size > 0),
            CONSTRAINT ck_ipos_retail_max CHECK (retail_max_lot > 0),
            CONSTRAINT ck_ipos_hni_max    CHECK (hni_max_amount > 0)
        );
    """)
    op.execute("CREATE INDEX idx_ipos_status_category ON ipos (status, category);")
    op.execute("""
        CREATE TRIGGER trg_ipos_updated_at
            BEFORE UPDATE ON ipos
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ipos CASCADE;")
