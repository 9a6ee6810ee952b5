"""005: create vendor_commission_configs table

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
    op.execute("""
        CREATE TABLE vendor_commission_configs (
            id              SERIAL          PRIMARY KEY,
            vendor_id       INTEGER         NOT NULL REFERENCES users (id),
            percentage      NUMERIC(5, 2)   NOT NULL,
            basis           VARCHAR(10)     NOT NULL DEFAULT 'pago',
            minimum         NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            comment         TEXT            NOT NULL DEFAULT '',
            active          BOOLEAN         NOT NULL DEFAULT TRUE,
            effective_from  DATE            NOT NULL DEFAULT CURRENT_DATE,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_vcc_percentage CHECK (percentage >= 0 AND percentage <= 100),
            CONSTRAINT ck_vcc_basis      CHECK (basis IN ('venta', 'pago', 'cobro')),
            CONSTRAINT ck_vcc_minimum    CHECK (minimum >= 0)
        );
    """)
    # One active config per vendor; inactive rows are history
    op.execute("""
        CREATE UNIQUE INDEX uq_vcc_vendor_active
            ON vendor_commission_configs (vendor_id)
            WHERE active;
    """)
    op.execute("""
        CREATE TRIGGER trg_vcc_updated_at
            BEFORE UPDATE ON vendor_commission_configs
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS vendor_commission_configs CASCADE;")
