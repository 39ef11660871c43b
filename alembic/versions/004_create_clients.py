"""004: create clients table

Revision ID: 004
Revises: 003
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE clients (
            id               VARCHAR(32)     PRIMARY KEY,
            trading_code     VARCHAR(32)     NOT NULL,
            client_name      VARCHAR(200)    NOT NULL,
            pan              VARCHAR(10)     NOT NULL,
            dp_id            VARCHAR(32)     NOT NULL,
            upi_handle       VARCHAR(100)    NOT NULL,
            broker_code      VARCHAR(32)     NOT NULL
                REFERENCES brokers (broker_code) ON UPDATE CASCADE,
            mobile           VARCHAR(20),
            email            VARCHAR(200),
            group_code       VARCHAR(32),
            bank_name        VARCHAR(100),
            branch           VARCHAR(100),
            asba_account     VARCHAR(34),
            created_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_clients_broker_trading_code UNIQUE (broker_code, trading_code)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_clients_updated_at
            BEFORE UPDATE ON clients
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS clients CASCADE;")
