"""LedgerApplicationService - thin composition layer over the movement store.

record_movement commits its own insert; statement and listing are read-only.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.enums import MovementKind
from src.crm_common.errors import ClientNotFoundError, InvalidRangeError
from src.crm_common.money import ZERO, money_to_display, to_money
from src.crm_ledger.application.schemas import (
    ClientStatementResponse,
    MovementItem,
    MovementListResponse,
    StatementLineItem,
)
from src.crm_ledger.domain.models import StatementLine
from src.crm_ledger.domain.repository import MovementRepositoryProtocol
from src.crm_ledger.domain.sign_convention import signed_amount
from src.crm_ledger.infrastructure.persistence import MovementRepository

logger = logging.getLogger(__name__)

_ALL_KINDS = [k.value for k in MovementKind]


class LedgerApplicationService:
    def __init__(self, repo: MovementRepositoryProtocol | None = None) -> None:
        self._repo: MovementRepositoryProtocol = repo or MovementRepository()

    async def record_movement(
        self,
        db: AsyncSession,
        movement_date: date,
        client_id: int,
        vendor_id: int,
        kind: MovementKind,
        amount: Decimal,
        document: str | None = None,
        note: str | None = None,
    ) -> MovementItem:
        try:
            client = await self._repo.get_client(db, client_id)
            if client is None:
                raise ClientNotFoundError(client_id)
            current = ZERO
            if kind == MovementKind.BALANCE_RESET:
                current = await self._repo.get_client_balance(db, client_id)
            stored = signed_amount(kind, amount, current)
            movement = await self._repo.insert_movement(
                db, movement_date, client_id, vendor_id, kind.value, stored, document, note
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        movement.client_name = client.legal_name
        logger.info(
            "Movement %s recorded: client=%s kind=%s amount=%s",
            movement.id, client_id, kind.value, stored,
        )
        return MovementItem.from_domain(movement)

    async def client_statement(
        self, db: AsyncSession, client_id: int
    ) -> ClientStatementResponse:
        client = await self._repo.get_client(db, client_id)
        if client is None:
            raise ClientNotFoundError(client_id)
        movements = await self._repo.list_for_client(db, client_id)

        balance = ZERO
        lines: list[StatementLineItem] = []
        for m in movements:
            balance += m.amount
            lines.append(StatementLineItem.from_line(StatementLine(m, balance)))

        return ClientStatementResponse(
            client_id=client.id,
            client_name=client.legal_name,
            lines=lines,
            balance=to_money(balance),
            balance_display=money_to_display(balance),
        )

    async def list_vendor_movements(
        self, db: AsyncSession, vendor_id: int, date_from: date, date_to: date
    ) -> MovementListResponse:
        if date_from > date_to:
            raise InvalidRangeError(date_from, date_to)
        movements = await self._repo.list_for_vendor_period(
            db, vendor_id, date_from, date_to, _ALL_KINDS
        )
        return MovementListResponse(items=[MovementItem.from_domain(m) for m in movements])
