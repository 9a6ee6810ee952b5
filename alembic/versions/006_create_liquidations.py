"""006: create liquidations and liquidation_detail_lines tables

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
        CREATE TABLE liquidations (
            id                      SERIAL          PRIMARY KEY,
            vendor_id               INTEGER         NOT NULL REFERENCES users (id),
            period_from             DATE            NOT NULL,
            period_to               DATE            NOT NULL,
            basis                   VARCHAR(10)     NOT NULL,
            percentage              NUMERIC(5, 2)   NOT NULL,
            total_base              NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            total_commission        NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            movement_count          INTEGER         NOT NULL DEFAULT 0,
            client_count            INTEGER         NOT NULL DEFAULT 0,
            advances_applied        NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            cash_in_hand_applied    NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            other_discounts         NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            other_bonuses           NUMERIC(14, 2)  NOT NULL DEFAULT 0,
            total_net               NUMERIC(14, 2)  NOT NULL,
            payment_method          VARCHAR(50)     NOT NULL DEFAULT 'transferencia',
            payment_reference       VARCHAR(200)    NOT NULL DEFAULT '',
            notes                   TEXT            NOT NULL DEFAULT '',
            delivery_date           DATE,
            state                   VARCHAR(20)     NOT NULL DEFAULT 'calculada',
            vendor_signed           BOOLEAN         NOT NULL DEFAULT FALSE,
            admin_signed            BOOLEAN         NOT NULL DEFAULT FALSE,
            payment_date            DATE,
            payment_notes           TEXT,
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_liq_period CHECK (period_from <= period_to),
            CONSTRAINT ck_liq_state  CHECK (state IN ('calculada', 'pagada', 'anulada')),
            CONSTRAINT ck_liq_basis  CHECK (basis IN ('venta', 'pago', 'cobro')),
            CONSTRAINT ck_liq_adjustments_non_negative CHECK (
                advances_applied >= 0 AND cash_in_hand_applied >= 0
                AND other_discounts >= 0 AND other_bonuses >= 0
            ),
            CONSTRAINT ck_liq_net_formula CHECK (
                total_net = total_commission - advances_applied - cash_in_hand_applied
                            - other_discounts + other_bonuses
            ),
            CONSTRAINT ck_liq_paid_has_date CHECK (state <> 'pagada' OR payment_date IS NOT NULL)
        );
    """)
    op.execute(
        "CREATE INDEX idx_liquidations_vendor_period ON liquidations (vendor_id, period_to DESC, id DESC);"
    )
    op.execute("""
        CREATE UNIQUE INDEX uq_liquidations_vendor_period
            ON liquidations (vendor_id, period_from, period_to)
            WHERE state <> 'anulada';
    """)
    op.execute("""
        CREATE TRIGGER trg_liquidations_updated_at
            BEFORE UPDATE ON liquidations
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)

    op.execute("""
        CREATE TABLE liquidation_detail_lines (
            id                  BIGSERIAL       PRIMARY KEY,
            liquidation_id      INTEGER         NOT NULL REFERENCES liquidations (id),
            movement_id         BIGINT          NOT NULL,
            client_id           INTEGER         NOT NULL,
            client_name         VARCHAR(200),
            movement_date       DATE            NOT NULL,
            movement_kind       VARCHAR(30)     NOT NULL,
            movement_amount     NUMERIC(14, 2)  NOT NULL,
            eligible_base       NUMERIC(14, 2)  NOT NULL,
            percentage          NUMERIC(5, 2)   NOT NULL,
            commission          NUMERIC(14, 4)  NOT NULL
        );
    """)
    op.execute(
        "CREATE INDEX idx_liq_detail_liquidation ON liquidation_detail_lines (liquidation_id);"
    )
    op.execute(
        "COMMENT ON TABLE liquidation_detail_lines IS 'Frozen copy of the calculation lines';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS liquidation_detail_lines CASCADE;")
    op.execute("DROP TABLE IF EXISTS liquidations CASCADE;")
