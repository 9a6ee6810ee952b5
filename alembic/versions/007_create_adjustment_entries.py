"""007: create advance_entries and cash_in_hand_entries tables

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
    op.execute("""
        CREATE TABLE advance_entries (
            id              SERIAL          PRIMARY KEY,
            vendor_id       INTEGER         NOT NULL REFERENCES users (id),
            entry_date      DATE            NOT NULL,
            amount          NUMERIC(14, 2)  NOT NULL,
            reason          TEXT            NOT NULL DEFAULT '',
            state           VARCHAR(20)     NOT NULL DEFAULT 'pendiente',
            liquidation_id  INTEGER         REFERENCES liquidations (id),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_advance_amount CHECK (amount > 0),
            CONSTRAINT ck_advance_state  CHECK (state IN ('pendiente', 'aplicado', 'cancelado')),
            CONSTRAINT ck_advance_applied_has_liquidation CHECK (
                (state = 'aplicado') = (liquidation_id IS NOT NULL)
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_advance_vendor_state ON advance_entries (vendor_id, state);"
    )
    op.execute("""
        CREATE TRIGGER trg_advance_entries_updated_at
            BEFORE UPDATE ON advance_entries
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)

    op.execute("""
        CREATE TABLE cash_in_hand_entries (
            id              SERIAL          PRIMARY KEY,
            vendor_id       INTEGER         NOT NULL REFERENCES users (id),
            entry_date      DATE            NOT NULL,
            client_id       INTEGER         NOT NULL REFERENCES clients (id),
            amount          NUMERIC(14, 2)  NOT NULL,
            concept         TEXT            NOT NULL DEFAULT '',
            state           VARCHAR(20)     NOT NULL DEFAULT 'pendiente',
            liquidation_id  INTEGER         REFERENCES liquidations (id),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_cash_amount CHECK (amount > 0),
            CONSTRAINT ck_cash_state  CHECK (state IN ('pendiente', 'aplicado', 'cancelado')),
            CONSTRAINT ck_cash_applied_has_liquidation CHECK (
                (state = 'aplicado') = (liquidation_id IS NOT NULL)
            )
        );
    """)
    op.execute(
        "CREATE INDEX idx_cash_vendor_state ON cash_in_hand_entries (vendor_id, state);"
    )
    op.execute("""
        CREATE TRIGGER trg_cash_in_hand_entries_updated_at
            BEFORE UPDATE ON cash_in_hand_entries
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS cash_in_hand_entries CASCADE;")
    op.execute("DROP TABLE IF EXISTS advance_entries CASCADE;")
