"""002: create brokers table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE brokers (
            id               VARCHAR(32)     PRIMARY KEY,
            broker_code      VARCHAR(32)     NOT NULL,
            username         VARCHAR(64)     NOT NULL,
            password_hash    VARCHAR(255)    NOT NULL,
            mobile           VARCHAR(20)     NOT NULL,
            email            VARCHAR(200)    NOT NULL,
            pan              VARCHAR(10)     NOT NULL,
            bid_permission   BOOLEAN         NOT NULL DEFAULT FALSE,
            login_access     BOOLEAN         NOT NULL DEFAULT FALSE,
            bill_permission  BOOLEAN         NOT NULL DEFAULT FALSE,
            role             VARCHAR(16)     NOT NULL DEFAULT 'subbroker',
            created_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at       TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_brokers_broker_code UNIQUE (broker_code),
            CONSTRAINT uq_brokers_username    UNIQUE (username),
            CONSTRAINT ck_brokers_role        CHECK (role IN ('admin', 'subbroker'))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_brokers_updated_at
            BEFORE UPDATE ON brokers
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)
    op.execute("COMMENT ON TABLE brokers IS 'Broker accounts: administrators and sub-brokers';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS brokers CASCADE;")
