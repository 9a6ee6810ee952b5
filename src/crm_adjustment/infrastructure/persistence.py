"""AdjustmentRepository - concrete implementation of AdjustmentRepositoryProtocol.

Raw text() SQL against advance_entries and cash_in_hand_entries. State
changes are conditional UPDATEs on state = 'pendiente' so an entry can only
ever leave the pending state once.

Transaction ownership: the CALLER (application service or liquidation
engine) commits or rolls back.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_adjustment.domain.models import (
    AdjustmentSummary,
    AdvanceEntry,
    CashInHandEntry,
)
from src.crm_common.errors import InternalError

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_ADVANCE_COLUMNS = "id, vendor_id, entry_date, amount, reason, state, liquidation_id, created_at"

_VENDOR_EXISTS_SQL = text("""
    SELECT 1 FROM users WHERE id = :vendor_id AND active = TRUE
""")

_INSERT_ADVANCE_SQL = text(f"""
    INSERT INTO advance_entries (vendor_id, entry_date, amount, reason, state)
    VALUES (:vendor_id, :entry_date, :amount, :reason, 'pendiente')
    RETURNING {_ADVANCE_COLUMNS}
""")

_INSERT_CASH_SQL = text("""
    INSERT INTO cash_in_hand_entries (vendor_id, entry_date, client_id, amount, concept, state)
    VALUES (:vendor_id, :entry_date, :client_id, :amount, :concept, 'pendiente')
    RETURNING id
""")

_LIST_PENDING_ADVANCES_SQL = text(f"""
    SELECT {_ADVANCE_COLUMNS}
    FROM advance_entries
    WHERE vendor_id = :vendor_id AND state = 'pendiente'
    ORDER BY entry_date DESC, id DESC
""")

_CASH_SELECT = """
    SELECT e.id, e.vendor_id, e.entry_date, e.client_id, e.amount, e.concept,
           e.state, e.liquidation_id, e.created_at, c.legal_name AS client_name
    FROM cash_in_hand_entries e
    JOIN clients c ON c.id = e.client_id
"""

_LIST_PENDING_CASH_SQL = text(_CASH_SELECT + """
    WHERE e.vendor_id = :vendor_id AND e.state = 'pendiente'
    ORDER BY e.entry_date DESC, e.id DESC
""")

_GET_CASH_SQL = text(_CASH_SELECT + " WHERE e.id = :entry_id")

_GET_ADVANCE_SQL = text(f"""
    SELECT {_ADVANCE_COLUMNS} FROM advance_entries WHERE id = :entry_id
""")

_SUMMARY_SQL = text("""
    SELECT
        (SELECT COALESCE(SUM(amount), 0) FROM advance_entries
          WHERE vendor_id = :vendor_id AND state = 'pendiente') AS advances_pending,
        (SELECT COALESCE(SUM(amount), 0) FROM cash_in_hand_entries
          WHERE vendor_id = :vendor_id AND state = 'pendiente') AS cash_in_hand_pending
""")

_CANCEL_ADVANCE_SQL = text("""
    UPDATE advance_entries
    SET state = 'cancelado'
    WHERE id = :entry_id AND state = 'pendiente'
    RETURNING id
""")

_CANCEL_CASH_SQL = text("""
    UPDATE cash_in_hand_entries
    SET state = 'cancelado'
    WHERE id = :entry_id AND state = 'pendiente'
    RETURNING id
""")

_APPLY_ADVANCES_SQL = text("""
    UPDATE advance_entries
    SET state = 'aplicado', liquidation_id = :liquidation_id
    WHERE vendor_id = :vendor_id AND state = 'pendiente'
""")

_APPLY_CASH_SQL = text("""
    UPDATE cash_in_hand_entries
    SET state = 'aplicado', liquidation_id = :liquidation_id
    WHERE vendor_id = :vendor_id AND state = 'pendiente'
""")

_ADVANCES_FOR_LIQUIDATION_SQL = text(f"""
    SELECT {_ADVANCE_COLUMNS}
    FROM advance_entries
    WHERE liquidation_id = :liquidation_id
    ORDER BY entry_date, id
""")

_CASH_FOR_LIQUIDATION_SQL = text(_CASH_SELECT + """
    WHERE e.liquidation_id = :liquidation_id
    ORDER BY e.entry_date, e.id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_advance(row: object) -> AdvanceEntry:
    return AdvanceEntry(
        id=row.id,  # type: ignore[attr-defined]
        vendor_id=row.vendor_id,  # type: ignore[attr-defined]
        entry_date=row.entry_date,  # type: ignore[attr-defined]
        amount=Decimal(row.amount),  # type: ignore[attr-defined]
        reason=row.reason,  # type: ignore[attr-defined]
        state=row.state,  # type: ignore[attr-defined]
        liquidation_id=row.liquidation_id,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_cash(row: object) -> CashInHandEntry:
    return CashInHandEntry(
        id=row.id,  # type: ignore[attr-defined]
        vendor_id=row.vendor_id,  # type: ignore[attr-defined]
        entry_date=row.entry_date,  # type: ignore[attr-defined]
        client_id=row.client_id,  # type: ignore[attr-defined]
        amount=Decimal(row.amount),  # type: ignore[attr-defined]
        concept=row.concept,  # type: ignore[attr-defined]
        state=row.state,  # type: ignore[attr-defined]
        liquidation_id=row.liquidation_id,  # type: ignore[attr-defined]
        client_name=row.client_name,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class AdjustmentRepository:
    """Concrete repository for both adjustment ledgers."""

    async def vendor_exists(self, db: AsyncSession, vendor_id: int) -> bool:
        result = await db.execute(_VENDOR_EXISTS_SQL, {"vendor_id": vendor_id})
        return result.fetchone() is not None

    async def insert_advance(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        amount: Decimal,
        reason: str,
    ) -> AdvanceEntry:
        result = await db.execute(
            _INSERT_ADVANCE_SQL,
            {"vendor_id": vendor_id, "entry_date": entry_date, "amount": amount, "reason": reason},
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Advance insert returned no rows")
        return _row_to_advance(row)

    async def insert_cash_in_hand(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        client_id: int,
        amount: Decimal,
        concept: str,
    ) -> CashInHandEntry:
        result = await db.execute(
            _INSERT_CASH_SQL,
            {
                "vendor_id": vendor_id,
                "entry_date": entry_date,
                "client_id": client_id,
                "amount": amount,
                "concept": concept,
            },
        )
        entry_id = result.scalar_one_or_none()
        if entry_id is None:
            raise InternalError("Cash-in-hand insert returned no rows")
        entry = await self.get_cash_in_hand(db, entry_id)
        if entry is None:
            raise InternalError(f"Cash-in-hand entry {entry_id} missing after insert")
        return entry

    async def list_pending_advances(
        self, db: AsyncSession, vendor_id: int
    ) -> list[AdvanceEntry]:
        result = await db.execute(_LIST_PENDING_ADVANCES_SQL, {"vendor_id": vendor_id})
        return [_row_to_advance(row) for row in result.fetchall()]

    async def list_pending_cash_in_hand(
        self, db: AsyncSession, vendor_id: int
    ) -> list[CashInHandEntry]:
        result = await db.execute(_LIST_PENDING_CASH_SQL, {"vendor_id": vendor_id})
        return [_row_to_cash(row) for row in result.fetchall()]

    async def get_summary(self, db: AsyncSession, vendor_id: int) -> AdjustmentSummary:
        row = (await db.execute(_SUMMARY_SQL, {"vendor_id": vendor_id})).fetchone()
        if row is None:
            raise InternalError("Adjustment summary returned no rows")
        return AdjustmentSummary(
            advances_pending=Decimal(row.advances_pending),
            cash_in_hand_pending=Decimal(row.cash_in_hand_pending),
        )

    async def get_advance(self, db: AsyncSession, entry_id: int) -> AdvanceEntry | None:
        row = (await db.execute(_GET_ADVANCE_SQL, {"entry_id": entry_id})).fetchone()
        return _row_to_advance(row) if row is not None else None

    async def get_cash_in_hand(
        self, db: AsyncSession, entry_id: int
    ) -> CashInHandEntry | None:
        row = (await db.execute(_GET_CASH_SQL, {"entry_id": entry_id})).fetchone()
        return _row_to_cash(row) if row is not None else None

    async def cancel_advance(self, db: AsyncSession, entry_id: int) -> AdvanceEntry | None:
        """Cancel a pending advance. Returns None when nothing was pending."""
        result = await db.execute(_CANCEL_ADVANCE_SQL, {"entry_id": entry_id})
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_advance(db, entry_id)

    async def cancel_cash_in_hand(
        self, db: AsyncSession, entry_id: int
    ) -> CashInHandEntry | None:
        """Cancel a pending cash-in-hand entry. Returns None when nothing was pending."""
        result = await db.execute(_CANCEL_CASH_SQL, {"entry_id": entry_id})
        if result.scalar_one_or_none() is None:
            return None
        return await self.get_cash_in_hand(db, entry_id)

    async def mark_pending_advances_applied(
        self, db: AsyncSession, vendor_id: int, liquidation_id: int
    ) -> int:
        result = await db.execute(
            _APPLY_ADVANCES_SQL, {"vendor_id": vendor_id, "liquidation_id": liquidation_id}
        )
        return result.rowcount  # type: ignore[attr-defined]

    async def mark_pending_cash_in_hand_applied(
        self, db: AsyncSession, vendor_id: int, liquidation_id: int
    ) -> int:
        result = await db.execute(
            _APPLY_CASH_SQL, {"vendor_id": vendor_id, "liquidation_id": liquidation_id}
        )
        return result.rowcount  # type: ignore[attr-defined]

    async def list_advances_for_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[AdvanceEntry]:
        result = await db.execute(
            _ADVANCES_FOR_LIQUIDATION_SQL, {"liquidation_id": liquidation_id}
        )
        return [_row_to_advance(row) for row in result.fetchall()]

    async def list_cash_in_hand_for_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[CashInHandEntry]:
        result = await db.execute(_CASH_FOR_LIQUIDATION_SQL, {"liquidation_id": liquidation_id})
        return [_row_to_cash(row) for row in result.fetchall()]
