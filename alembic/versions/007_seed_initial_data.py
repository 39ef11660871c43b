"""007: seed initial data

Revision ID: 007
Revises: 006
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "007"
down_revision: Union[str, None] = "006"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Local dev logins: admin / admin@123, BRK001 / broker@123
    op.execute("""
        INSERT INTO brokers (id, broker_code, username, password_hash, mobile, email, pan,
            bid_permission, login_access, bill_permission, role)
        VALUES
            ('SEED-BRK-ADMIN', 'ADMIN', 'admin', crypt('admin@123', gen_salt('bf', 12)),
             '9000000000', 'admin@example.com', 'AAAPA0000A', TRUE, TRUE, TRUE, 'admin'),
            ('SEED-BRK-001', 'BRK001', 'brk001', crypt('broker@123', gen_salt('bf', 12)),
             '9000000001', 'brk001@example.com', 'AAAPB0001B', TRUE, TRUE, FALSE, 'subbroker');
    """)

    op.execute("""
        INSERT INTO ipos (id, name, category, status, price_band_min, price_band_max,
            lot_size, retail_max_lot, hni_max_amount, open_date, close_date)
        VALUES
            ('SEED-IPO-MB-001', 'Sample Mainboard Ltd', 'Mainboard', 'Active',
             100, 110, 10, 5, 1000000, '2026-10-15', '2026-10-22'),
            ('SEED-IPO-SME-001', 'Sample SME Industries', 'SME', 'Upcoming',
             50, 55, 2000, 1, 500000, '2026-11-02', '2026-11-05');
    """)

    op.execute("""
        INSERT INTO clients (id, trading_code, client_name, pan, dp_id, upi_handle, broker_code,
            mobile, bank_name, branch)
        VALUES
            ('SEED-CLI-001', 'C1', 'Asha Rao', 'ABCPR1234A', 'IN30000011111111', 'asha@okhdfc',
             'BRK001', '9800000001', 'HDFC Bank', 'Andheri'),
            ('SEED-CLI-002', 'C2', 'Vikram Shah', 'BCDPS2345B', 'IN30000022222222', 'vikram@ybl',
             'BRK001', '9800000002', 'ICICI Bank', 'Fort');
    """)

    op.execute("""
        INSERT INTO upi_handlers (id, name)
        VALUES ('SEED-UPI-1', '@okhdfc'), ('SEED-UPI-2', '@ybl'),
               ('SEED-UPI-3', '@paytm'), ('SEED-UPI-4', '@upi');
    """)


def downgrade() -> None:
    op.execute("DELETE FROM upi_handlers WHERE id LIKE 'SEED-UPI-%';")
    op.execute("DELETE FROM clients WHERE id LIKE 'SEED-CLI-%';")
    op.execute("DELETE FROM ipos WHERE id LIKE 'SEED-IPO-%';")
    op.execute("DELETE FROM brokers WHERE id LIKE 'SEED-BRK-%';")
