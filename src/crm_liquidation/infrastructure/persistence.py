"""LiquidationRepository - concrete implementation of LiquidationRepositoryProtocol.

Raw text() SQL against liquidations and liquidation_detail_lines. State
transitions are conditional UPDATEs: the WHERE clause carries the allowed
source state, so a False return means the row is missing or in the wrong state.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_commission.domain.models import CommissionCalculation, CommissionDetailLine
from src.crm_common.errors import InternalError
from src.crm_liquidation.domain.models import (
    Liquidation,
    LiquidationDetailLine,
    SettlementAdjustments,
)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

# Serializes concurrent settles for one vendor; released at commit/rollback.
_LOCK_VENDOR_SQL = text("SELECT pg_advisory_xact_lock(:lock_key)")

_FIND_OPEN_FOR_PERIOD_SQL = text("""
    SELECT id FROM liquidations
    WHERE vendor_id = :vendor_id
      AND period_from = :period_from
      AND period_to = :period_to
      AND state <> 'anulada'
    LIMIT 1
""")

_INSERT_LIQUIDATION_SQL = text("""
    INSERT INTO liquidations (
        vendor_id, period_from, period_to, basis, percentage,
        total_base, total_commission, movement_count, client_count,
        advances_applied, cash_in_hand_applied, other_discounts, other_bonuses,
        total_net, payment_method, payment_reference, notes, delivery_date, state
    ) VALUES (
        :vendor_id, :period_from, :period_to, :basis, :percentage,
        :total_base, :total_commission, :movement_count, :client_count,
        :advances_applied, :cash_in_hand_applied, :other_discounts, :other_bonuses,
        :total_net, :payment_method, :payment_reference, :notes, :delivery_date, 'calculada'
    )
    RETURNING id
""")

_INSERT_DETAIL_SQL = text("""
    INSERT INTO liquidation_detail_lines (
        liquidation_id, movement_id, client_id, client_name, movement_date,
        movement_kind, movement_amount, eligible_base, percentage, commission
    ) VALUES (
        :liquidation_id, :movement_id, :client_id, :client_name, :movement_date,
        :movement_kind, :movement_amount, :eligible_base, :percentage, :commission
    )
""")

_LIQUIDATION_SELECT = """
    SELECT l.id, l.vendor_id, u.name AS vendor_name, l.period_from, l.period_to,
           l.basis, l.percentage, l.total_base, l.total_commission,
           l.movement_count, l.client_count, l.advances_applied,
           l.cash_in_hand_applied, l.other_discounts, l.other_bonuses, l.total_net,
           l.payment_method, l.payment_reference, l.notes, l.delivery_date,
           l.state, l.vendor_signed, l.admin_signed, l.payment_date,
           l.payment_notes, l.created_at
    FROM liquidations l
    LEFT JOIN users u ON u.id = l.vendor_id
"""

_GET_LIQUIDATION_SQL = text(_LIQUIDATION_SELECT + " WHERE l.id = :liquidation_id")

_LIST_FOR_VENDOR_SQL = text(_LIQUIDATION_SELECT + """
    WHERE l.vendor_id = :vendor_id
    ORDER BY l.period_to DESC, l.id DESC
    LIMIT :limit
""")

_LIST_ALL_SQL = text(_LIQUIDATION_SELECT + """
    ORDER BY l.period_to DESC, l.id DESC
    LIMIT :limit
""")

_LIST_DETAILS_SQL = text("""
    SELECT id, liquidation_id, movement_id, client_id, client_name, movement_date,
           movement_kind, movement_amount, eligible_base, percentage, commission
    FROM liquidation_detail_lines
    WHERE liquidation_id = :liquidation_id
    ORDER BY movement_date, movement_id
""")

_MARK_PAID_SQL = text("""
    UPDATE liquidations
    SET state = 'pagada',
        payment_date = :payment_date,
        payment_notes = :notes,
        admin_signed = TRUE
    WHERE id = :liquidation_id AND state = 'calculada'
    RETURNING id
""")

_MARK_VENDOR_SIGNED_SQL = text("""
    UPDATE liquidations
    SET vendor_signed = TRUE
    WHERE id = :liquidation_id AND state <> 'anulada'
    RETURNING id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_liquidation(row: object) -> Liquidation:
    return Liquidation(
        id=row.id,  # type: ignore[attr-defined]
        vendor_id=row.vendor_id,  # type: ignore[attr-defined]
        vendor_name=row.vendor_name,  # type: ignore[attr-defined]
        period_from=row.period_from,  # type: ignore[attr-defined]
        period_to=row.period_to,  # type: ignore[attr-defined]
        basis=row.basis,  # type: ignore[attr-defined]
        percentage=Decimal(row.percentage),  # type: ignore[attr-defined]
        total_base=Decimal(row.total_base),  # type: ignore[attr-defined]
        total_commission=Decimal(row.total_commission),  # type: ignore[attr-defined]
        movement_count=row.movement_count,  # type: ignore[attr-defined]
        client_count=row.client_count,  # type: ignore[attr-defined]
        advances_applied=Decimal(row.advances_applied),  # type: ignore[attr-defined]
        cash_in_hand_applied=Decimal(row.cash_in_hand_applied),  # type: ignore[attr-defined]
        other_discounts=Decimal(row.other_discounts),  # type: ignore[attr-defined]
        other_bonuses=Decimal(row.other_bonuses),  # type: ignore[attr-defined]
        total_net=Decimal(row.total_net),  # type: ignore[attr-defined]
        payment_method=row.payment_method,  # type: ignore[attr-defined]
        payment_reference=row.payment_reference,  # type: ignore[attr-defined]
        notes=row.notes,  # type: ignore[attr-defined]
        state=row.state,  # type: ignore[attr-defined]
        vendor_signed=row.vendor_signed,  # type: ignore[attr-defined]
        admin_signed=row.admin_signed,  # type: ignore[attr-defined]
        delivery_date=row.delivery_date,  # type: ignore[attr-defined]
        payment_date=row.payment_date,  # type: ignore[attr-defined]
        payment_notes=row.payment_notes,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_detail(row: object) -> LiquidationDetailLine:
    return LiquidationDetailLine(
        id=row.id,  # type: ignore[attr-defined]
        liquidation_id=row.liquidation_id,  # type: ignore[attr-defined]
        movement_id=row.movement_id,  # type: ignore[attr-defined]
        client_id=row.client_id,  # type: ignore[attr-defined]
        client_name=row.client_name,  # type: ignore[attr-defined]
        movement_date=row.movement_date,  # type: ignore[attr-defined]
        movement_kind=row.movement_kind,  # type: ignore[attr-defined]
        movement_amount=Decimal(row.movement_amount),  # type: ignore[attr-defined]
        eligible_base=Decimal(row.eligible_base),  # type: ignore[attr-defined]
        percentage=Decimal(row.percentage),  # type: ignore[attr-defined]
        commission=Decimal(row.commission),  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class LiquidationRepository:
    """Concrete repository - inserts, conditional state updates, reads."""

    async def lock_vendor(self, db: AsyncSession, vendor_id: int) -> None:
        await db.execute(_LOCK_VENDOR_SQL, {"lock_key": vendor_id})

    async def find_open_for_period(
        self, db: AsyncSession, vendor_id: int, period_from: date, period_to: date
    ) -> int | None:
        result = await db.execute(
            _FIND_OPEN_FOR_PERIOD_SQL,
            {"vendor_id": vendor_id, "period_from": period_from, "period_to": period_to},
        )
        return result.scalar_one_or_none()

    async def insert_liquidation(
        self,
        db: AsyncSession,
        calc: CommissionCalculation,
        gross: Decimal,
        adjustments: SettlementAdjustments,
        total_net: Decimal,
    ) -> int:
        result = await db.execute(
            _INSERT_LIQUIDATION_SQL,
            {
                "vendor_id": calc.vendor_id,
                "period_from": calc.date_from,
                "period_to": calc.date_to,
                "basis": calc.config.basis,
                "percentage": calc.config.percentage,
                "total_base": calc.total_base,
                "total_commission": gross,
                "movement_count": calc.movement_count,
                "client_count": calc.client_count,
                "advances_applied": adjustments.advances,
                "cash_in_hand_applied": adjustments.cash_in_hand,
                "other_discounts": adjustments.other_discounts,
                "other_bonuses": adjustments.other_bonuses,
                "total_net": total_net,
                "payment_method": adjustments.payment_method,
                "payment_reference": adjustments.payment_reference,
                "notes": adjustments.notes,
                "delivery_date": adjustments.delivery_date,
            },
        )
        liquidation_id = result.scalar_one_or_none()
        if liquidation_id is None:
            raise InternalError("Liquidation insert returned no id")
        return liquidation_id

    async def insert_detail_lines(
        self,
        db: AsyncSession,
        liquidation_id: int,
        details: tuple[CommissionDetailLine, ...],
    ) -> int:
        if not details:
            return 0
        params = [
            {
                "liquidation_id": liquidation_id,
                "movement_id": d.movement_id,
                "client_id": d.client_id,
                "client_name": d.client_name,
                "movement_date": d.movement_date,
                "movement_kind": d.movement_kind,
                "movement_amount": d.movement_amount,
                "eligible_base": d.eligible_base,
                "percentage": d.percentage,
                "commission": d.commission,
            }
            for d in details
        ]
        await db.execute(_INSERT_DETAIL_SQL, params)
        return len(params)

    async def get_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> Liquidation | None:
        row = (
            await db.execute(_GET_LIQUIDATION_SQL, {"liquidation_id": liquidation_id})
        ).fetchone()
        return _row_to_liquidation(row) if row is not None else None

    async def list_detail_lines(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[LiquidationDetailLine]:
        result = await db.execute(_LIST_DETAILS_SQL, {"liquidation_id": liquidation_id})
        return [_row_to_detail(row) for row in result.fetchall()]

    async def list_liquidations(
        self, db: AsyncSession, vendor_id: int | None, limit: int
    ) -> list[Liquidation]:
        if vendor_id is None:
            result = await db.execute(_LIST_ALL_SQL, {"limit": limit})
        else:
            result = await db.execute(
                _LIST_FOR_VENDOR_SQL, {"vendor_id": vendor_id, "limit": limit}
            )
        return [_row_to_liquidation(row) for row in result.fetchall()]

    async def mark_paid(
        self, db: AsyncSession, liquidation_id: int, payment_date: date, notes: str | None
    ) -> bool:
        result = await db.execute(
            _MARK_PAID_SQL,
            {"liquidation_id": liquidation_id, "payment_date": payment_date, "notes": notes},
        )
        return result.scalar_one_or_none() is not None

    async def mark_vendor_signed(self, db: AsyncSession, liquidation_id: int) -> bool:
        result = await db.execute(_MARK_VENDOR_SIGNED_SQL, {"liquidation_id": liquidation_id})
        return result.scalar_one_or_none() is not None
