"""004: create movements table (append-only client ledger)

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
        CREATE TABLE movements (
            id              BIGSERIAL       PRIMARY KEY,
            movement_date   DATE            NOT NULL,
            client_id       INTEGER         NOT NULL REFERENCES clients (id),
            vendor_id       INTEGER         NOT NULL REFERENCES users (id),
            kind            VARCHAR(30)     NOT NULL,
            document        VARCHAR(100),
            amount          NUMERIC(14, 2)  NOT NULL,
            note            TEXT,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_movements_kind CHECK (
                kind IN ('Venta', 'Pago', 'Nota de Crédito', 'Ajuste de Saldo', 'Reestablecimiento')
            ),
            CONSTRAINT ck_movements_amount_nonzero CHECK (amount <> 0),
            CONSTRAINT ck_movements_sale_sign CHECK (kind <> 'Venta' OR amount > 0),
            CONSTRAINT ck_movements_credit_sign CHECK (
                kind NOT IN ('Pago', 'Nota de Crédito') OR amount < 0
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_movements_vendor_date ON movements (vendor_id, movement_date, id);"
    )
    op.execute(
        "CREATE INDEX idx_movements_client_date ON movements (client_id, movement_date, id);"
    )
    op.execute(
        "COMMENT ON TABLE movements IS 'Signed client ledger; rows are never updated or deleted';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS movements CASCADE;")
