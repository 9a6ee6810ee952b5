"""Repository Protocol - dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_adjustment.domain.models import (
    AdjustmentSummary,
    AdvanceEntry,
    CashInHandEntry,
)


class AdjustmentRepositoryProtocol(Protocol):
    async def vendor_exists(self, db: AsyncSession, vendor_id: int) -> bool: ...

    async def insert_advance(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        amount: Decimal,
        reason: str,
    ) -> AdvanceEntry: ...

    async def insert_cash_in_hand(
        self,
        db: AsyncSession,
        vendor_id: int,
        entry_date: date,
        client_id: int,
        amount: Decimal,
        concept: str,
    ) -> CashInHandEntry: ...

    async def list_pending_advances(
        self, db: AsyncSession, vendor_id: int
    ) -> list[AdvanceEntry]: ...

    async def list_pending_cash_in_hand(
        self, db: AsyncSession, vendor_id: int
    ) -> list[CashInHandEntry]: ...

    async def get_summary(self, db: AsyncSession, vendor_id: int) -> AdjustmentSummary: ...

    async def get_advance(self, db: AsyncSession, entry_id: int) -> AdvanceEntry | None: ...

    async def get_cash_in_hand(
        self, db: AsyncSession, entry_id: int
    ) -> CashInHandEntry | None: ...

    async def cancel_advance(self, db: AsyncSession, entry_id: int) -> AdvanceEntry | None: ...

    async def cancel_cash_in_hand(
        self, db: AsyncSession, entry_id: int
    ) -> CashInHandEntry | None: ...

    async def mark_pending_advances_applied(
        self, db: AsyncSession, vendor_id: int, liquidation_id: int
    ) -> int: ...

    async def mark_pending_cash_in_hand_applied(
        self, db: AsyncSession, vendor_id: int, liquidation_id: int
    ) -> int: ...

    async def list_advances_for_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[AdvanceEntry]: ...

    async def list_cash_in_hand_for_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[CashInHandEntry]: ...
