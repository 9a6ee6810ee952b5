"""AdjustmentApplicationService - registers, lists and cancels adjustment entries.

Entries are only moved to 'aplicado' by the liquidation engine, inside the
liquidation transaction; this service handles the pending/cancelled side.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_adjustment.application.schemas import (
    AdjustmentSummaryResponse,
    AdvanceItem,
    AdvanceListResponse,
    CashInHandItem,
    CashInHandListResponse,
)
from src.crm_adjustment.domain.repository import AdjustmentRepositoryProtocol
from src.crm_adjustment.infrastructure.persistence import AdjustmentRepository
from src.crm_common.errors import (
    AdjustmentEntryNotFoundError,
    AdjustmentEntryNotPendingError,
    ClientNotFoundError,
    InvalidAmountError,
    VendorNotFoundError,
)
from src.crm_common.money import ZERO, is_whole_cents
from src.crm_ledger.domain.repository import MovementRepositoryProtocol
from src.crm_ledger.infrastructure.persistence import MovementRepository

logger = logging.getLogger(__name__)


class AdjustmentApplicationService:
    def __init__(
        self,
        repo: AdjustmentRepositoryProtocol | None = None,
        clients: MovementRepositoryProtocol | None = None,
    ) -> None:
        self._repo: AdjustmentRepositoryProtocol = repo or AdjustmentRepository()
        self._clients: MovementRepositoryProtocol = clients or MovementRepository()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    async def register_advance(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        amount: Decimal,
        reason: str = "",
    ) -> AdvanceItem:
        if amount <= ZERO or not is_whole_cents(amount):
            raise InvalidAmountError("advance", amount)
        try:
            if not await self._repo.vendor_exists(db, vendor_id):
                raise VendorNotFoundError(vendor_id)
            entry = await self._repo.insert_advance(db, vendor_id, entry_date, amount, reason)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Advance %s registered: vendor=%s amount=%s", entry.id, vendor_id, amount)
        return AdvanceItem.from_domain(entry)

    async def register_cash_in_hand(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        client_id: int,
        amount: Decimal,
        concept: str = "",
    ) -> CashInHandItem:
        if amount <= ZERO or not is_whole_cents(amount):
            raise InvalidAmountError("cash_in_hand", amount)
        try:
            if not await self._repo.vendor_exists(db, vendor_id):
                raise VendorNotFoundError(vendor_id)
            if await self._clients.get_client(db, client_id) is None:
                raise ClientNotFoundError(client_id)
            entry = await self._repo.insert_cash_in_hand(
                db, vendor_id, entry_date, client_id, amount, concept
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Cash-in-hand %s registered: vendor=%s client=%s amount=%s",
            entry.id, vendor_id, client_id, amount,
        )
        return CashInHandItem.from_domain(entry)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def pending_advances(self, db: AsyncSession, vendor_id: int) -> AdvanceListResponse:
        entries = await self._repo.list_pending_advances(db, vendor_id)
        return AdvanceListResponse(items=[AdvanceItem.from_domain(e) for e in entries])

    async def pending_cash_in_hand(
        self, db: AsyncSession, vendor_id: int
    ) -> CashInHandListResponse:
        entries = await self._repo.list_pending_cash_in_hand(db, vendor_id)
        return CashInHandListResponse(items=[CashInHandItem.from_domain(e) for e in entries])

    async def adjustment_summary(
        self, db: AsyncSession, vendor_id: int
    ) -> AdjustmentSummaryResponse:
        summary = await self._repo.get_summary(db, vendor_id)
        return AdjustmentSummaryResponse.from_domain(vendor_id, summary)

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    async def cancel_advance(self, db: AsyncSession, entry_id: int) -> AdvanceItem:
        try:
            entry = await self._repo.cancel_advance(db, entry_id)
            if entry is None:
                existing = await self._repo.get_advance(db, entry_id)
                if existing is None:
                    raise AdjustmentEntryNotFoundError("Advance", entry_id)
                raise AdjustmentEntryNotPendingError("Advance", entry_id, existing.state)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Advance %s cancelled", entry_id)
        return AdvanceItem.from_domain(entry)

    async def cancel_cash_in_hand(self, db: AsyncSession, entry_id: int) -> CashInHandItem:
        try:
            entry = await self._repo.cancel_cash_in_hand(db, entry_id)
            if entry is None:
                existing = await self._repo.get_cash_in_hand(db, entry_id)
                if existing is None:
                    raise AdjustmentEntryNotFoundError("Cash-in-hand", entry_id)
                raise AdjustmentEntryNotPendingError("Cash-in-hand", entry_id, existing.state)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Cash-in-hand %s cancelled", entry_id)
        return CashInHandItem.from_domain(entry)
