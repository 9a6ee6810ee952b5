"""MovementRepository - concrete implementation of MovementRepositoryProtocol.

All queries use raw text() SQL (no ORM). Movements are append-only: this
repository never updates or deletes a row.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.errors import InternalError
from src.crm_ledger.domain.models import Client, Movement

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_CLIENT_SQL = text("""
    SELECT id, legal_name, vendor_id, active
    FROM clients
    WHERE id = :client_id
""")

_CLIENT_BALANCE_SQL = text("""
    SELECT COALESCE(SUM(amount), 0) AS balance
    FROM movements
    WHERE client_id = :client_id
""")

_INSERT_MOVEMENT_SQL = text("""
    INSERT INTO movements
        (movement_date, client_id, vendor_id, kind, document, amount, note)
    VALUES
        (:movement_date, :client_id, :vendor_id, :kind, :document, :amount, :note)
    RETURNING id, movement_date, client_id, vendor_id, kind, document, amount, note,
              created_at
""")

_LIST_VENDOR_PERIOD_SQL = text("""
    SELECT m.id, m.movement_date, m.client_id, m.vendor_id, m.kind, m.document,
           m.amount, m.note, m.created_at, c.legal_name AS client_name
    FROM movements m
    JOIN clients c ON c.id = m.client_id
    WHERE m.vendor_id = :vendor_id
      AND m.movement_date BETWEEN :date_from AND :date_to
      AND m.kind IN :kinds
    ORDER BY m.movement_date, m.id
""").bindparams(bindparam("kinds", expanding=True))

_LIST_CLIENT_SQL = text("""
    SELECT m.id, m.movement_date, m.client_id, m.vendor_id, m.kind, m.document,
           m.amount, m.note, m.created_at, c.legal_name AS client_name
    FROM movements m
    JOIN clients c ON c.id = m.client_id
    WHERE m.client_id = :client_id
    ORDER BY m.movement_date, m.id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_movement(row: object) -> Movement:
    return Movement(
        id=row.id,  # type: ignore[attr-defined]
        movement_date=row.movement_date,  # type: ignore[attr-defined]
        client_id=row.client_id,  # type: ignore[attr-defined]
        vendor_id=row.vendor_id,  # type: ignore[attr-defined]
        kind=row.kind,  # type: ignore[attr-defined]
        amount=Decimal(row.amount),  # type: ignore[attr-defined]
        document=row.document,  # type: ignore[attr-defined]
        note=row.note,  # type: ignore[attr-defined]
        client_name=getattr(row, "client_name", None),
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MovementRepository:
    """Concrete repository - insert-only writes, ordered reads."""

    async def get_client(self, db: AsyncSession, client_id: int) -> Client | None:
        row = (await db.execute(_GET_CLIENT_SQL, {"client_id": client_id})).fetchone()
        if row is None:
            return None
        return Client(
            id=row.id,
            legal_name=row.legal_name,
            vendor_id=row.vendor_id,
            active=row.active,
        )

    async def get_client_balance(self, db: AsyncSession, client_id: int) -> Decimal:
        result = await db.execute(_CLIENT_BALANCE_SQL, {"client_id": client_id})
        return Decimal(result.scalar_one())

    async def insert_movement(
        self,
        db: AsyncSession,
        movement_date: date,
        client_id: int,
        vendor_id: int,
        kind: str,
        amount: Decimal,
        document: str | None,
        note: str | None,
    ) -> Movement:
        result = await db.execute(
            _INSERT_MOVEMENT_SQL,
            {
                "movement_date": movement_date,
                "client_id": client_id,
                "vendor_id": vendor_id,
                "kind": kind,
                "document": document,
                "amount": amount,
                "note": note,
            },
        )
        row = result.fetchone()
        if row is None:
            raise InternalError("Movement insert returned no rows")
        return _row_to_movement(row)

    async def list_for_vendor_period(
        self,
        db: AsyncSession,
        vendor_id: int,
        date_from: date,
        date_to: date,
        kinds: list[str],
    ) -> list[Movement]:
        if not kinds:
            return []
        result = await db.execute(
            _LIST_VENDOR_PERIOD_SQL,
            {
                "vendor_id": vendor_id,
                "date_from": date_from,
                "date_to": date_to,
                "kinds": kinds,
            },
        )
        return [_row_to_movement(row) for row in result.fetchall()]

    async def list_for_client(self, db: AsyncSession, client_id: int) -> list[Movement]:
        result = await db.execute(_LIST_CLIENT_SQL, {"client_id": client_id})
        return [_row_to_movement(row) for row in result.fetchall()]
