"""Repository Protocol - dependency inversion for testability."""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_commission.domain.models import CommissionCalculation, CommissionDetailLine
from src.crm_liquidation.domain.models import (
    Liquidation,
    LiquidationDetailLine,
    SettlementAdjustments,
)


class LiquidationRepositoryProtocol(Protocol):
    async def lock_vendor(self, db: AsyncSession, vendor_id: int) -> None: ...

    async def find_open_for_period(
        self, db: AsyncSession, vendor_id: int, period_from: date, period_to: date
    ) -> int | None: ...

    async def insert_liquidation(
        self,
        db: AsyncSession,
        calc: CommissionCalculation,
        gross: Decimal,
        adjustments: SettlementAdjustments,
        total_net: Decimal,
    ) -> int: ...

    async def insert_detail_lines(
        self,
        db: AsyncSession,
        liquidation_id: int,
        details: tuple[CommissionDetailLine, ...],
    ) -> int: ...

    async def get_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> Liquidation | None: ...

    async def list_detail_lines(
        self, db: AsyncSession, liquidation_id: int
    ) -> list[LiquidationDetailLine]: ...

    async def list_liquidations(
        self, db: AsyncSession, vendor_id: int | None, limit: int
    ) -> list[Liquidation]: ...

    async def mark_paid(
        self, db: AsyncSession, liquidation_id: int, payment_date: date, notes: str | None
    ) -> bool: ...

    async def mark_vendor_signed(self, db: AsyncSession, liquidation_id: int) -> bool: ...
