"""005: create bids table

Revision ID: 005
Revises: 004
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "005"
down_revision: Union[str, None] = "004"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Client and IPO fields are snapshots taken at bid time, no foreign keys.
    # uq_bids_ipo_client / uq_bids_application_number are matched by name in
    # src/ipo_bidding/infrastructure/persistence.py.
    op.execute("""
        CREATE TABLE bids (
            id                   VARCHAR(32)     PRIMARY KEY,
            ipo_id               VARCHAR(32)     NOT NULL,
            ipo_name             VARCHAR(200)    NOT NULL,
            client_code          VARCHAR(32)     NOT NULL,
            client_name          VARCHAR(200)    NOT NULL,
            pan                  VARCHAR(10)     NOT NULL,
            upi_id               VARCHAR(100)    NOT NULL,
            quantity             INTEGER         NOT NULL,
            price                BIGINT          NOT NULL,
            use_cutoff           BOOLEAN         NOT NULL DEFAULT FALSE,
            amount               BIGINT          NOT NULL,
            category             VARCHAR(16)     NOT NULL,
            application_number   VARCHAR(40)     NOT NULL,
            broker_code          VARCHAR(32)     NOT NULL,
            group_code           VARCHAR(32),
            exchange_code        VARCHAR(8)      NOT NULL DEFAULT 'NSE',
            exchange_status      VARCHAR(32)     NOT NULL DEFAULT 'Pending',
            dp_status            VARCHAR(16)     NOT NULL DEFAULT 'Active',
            sponsor_bank_status  VARCHAR(16)     NOT NULL DEFAULT 'Pending',
            exchange_datetime    TIMESTAMPTZ,
            created_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_bids_ipo_client          UNIQUE (ipo_id, client_code),
            CONSTRAINT uq_bids_application_number  UNIQUE (application_number),
            CONSTRAINT ck_bids_category  CHECK (category IN ('Retail', 'HNI')),
            CONSTRAINT ck_bids_quantity  CHECK (quantity > 0),
            CONSTRAINT ck_bids_price     CHECK (price >= 0),
            CONSTRAINT ck_bids_amount    CHECK (amount = quantity * price),
            CONSTRAINT ck_bids_exchange_status CHECK (exchange_status IN (
                'Pending', 'Accepted', 'Rejected by UPI', 'Rejected by Investor',
                'Rejected by Investor Bank', 'Rejected by Sponsor Bank')),
            CONSTRAINT ck_bids_sponsor_bank_status
                CHECK (sponsor_bank_status IN ('Pending', 'Accepted', 'Rejected')),
            CONSTRAINT ck_bids_dp_status CHECK (dp_status IN ('Active', 'Inactive'))
        );
    """)
    op.execute("CREATE INDEX idx_bids_broker_code ON bids (broker_code, created_at DESC);")
    op.execute("""
        CREATE TRIGGER trg_bids_updated_at
            BEFORE UPDATE ON bids
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE bids IS 'IPO bids, at most one per (IPO, client)';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS bids CASCADE;")
