"""LiquidationApplicationService - settle a calculation and manage its lifecycle.

settle() owns the liquidation transaction. It takes the per-vendor advisory
lock, refuses a period that already has a live liquidation, calculates, and
lets the engine write inside the same session before committing once. A
failure while writing is rolled back and surfaced as TransactionFailureError;
there is no retry.
"""

import dataclasses
import logging
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.crm_adjustment.application.schemas import AdvanceItem, CashInHandItem
from src.crm_adjustment.domain.repository import AdjustmentRepositoryProtocol
from src.crm_adjustment.infrastructure.persistence import AdjustmentRepository
from src.crm_commission.application.schemas import CalculationResponse
from src.crm_commission.application.service import CommissionApplicationService
from src.crm_common.errors import (
    InvalidLiquidationStateError,
    LiquidationAlreadyExistsError,
    LiquidationNotFoundError,
    TransactionFailureError,
)
from src.crm_common.money import money_to_display, to_money
from src.crm_liquidation.application.schemas import (
    LiquidationDetailOut,
    LiquidationDetailResponse,
    LiquidationListResponse,
    LiquidationResponse,
    SettleResponse,
)
from src.crm_liquidation.domain.engine import settle
from src.crm_liquidation.domain.models import SettlementAdjustments
from src.crm_liquidation.domain.net import compute_net
from src.crm_liquidation.domain.repository import LiquidationRepositoryProtocol
from src.crm_liquidation.infrastructure.persistence import LiquidationRepository

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_LIMIT = 10
DEFAULT_OVERALL_LIMIT = 20


class LiquidationApplicationService:
    def __init__(
        self,
        repo: LiquidationRepositoryProtocol | None = None,
        entries: AdjustmentRepositoryProtocol | None = None,
        commissions: CommissionApplicationService | None = None,
    ) -> None:
        self._repo: LiquidationRepositoryProtocol = repo or LiquidationRepository()
        self._entries: AdjustmentRepositoryProtocol = entries or AdjustmentRepository()
        self._commissions = commissions or CommissionApplicationService()

    # ------------------------------------------------------------------
    # Settle
    # ------------------------------------------------------------------

    async def settle(
        self,
        db: AsyncSession,
        vendor_id: int,
        date_from: date,
        date_to: date,
        adjustments: SettlementAdjustments | None = None,
    ) -> SettleResponse:
        adjustments = adjustments or SettlementAdjustments()
        adjustments.validate()
        if not adjustments.payment_method:
            adjustments = dataclasses.replace(
                adjustments, payment_method=settings.DEFAULT_PAYMENT_METHOD
            )

        # The lock precedes every read the settlement depends on.
        try:
            await self._repo.lock_vendor(db, vendor_id)
            existing_id = await self._repo.find_open_for_period(db, vendor_id, date_from, date_to)
            if existing_id is not None:
                raise LiquidationAlreadyExistsError(vendor_id, existing_id)
            calc = await self._commissions.calculate(db, vendor_id, date_from, date_to)
        except Exception:
            await db.rollback()
            raise

        try:
            liquidation_id = await settle(db, calc, adjustments, self._repo, self._entries)
            await db.commit()
        except Exception as e:
            await db.rollback()
            logger.exception(
                "Liquidation for vendor %s %s..%s rolled back", vendor_id, date_from, date_to
            )
            raise TransactionFailureError(str(e) or type(e).__name__) from e

        total_net = compute_net(to_money(calc.total_commission), adjustments.rounded())
        logger.info(
            "Liquidation %s created: vendor=%s period=%s..%s gross=%s net=%s",
            liquidation_id, vendor_id, date_from, date_to,
            to_money(calc.total_commission), total_net,
        )
        return SettleResponse(
            liquidation_id=liquidation_id,
            calculation=CalculationResponse.from_domain(calc),
            total_net=total_net,
            total_net_display=money_to_display(total_net),
        )

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    async def mark_paid(
        self,
        db: AsyncSession,
        liquidation_id: int,
        payment_date: date,
        notes: str | None = None,
    ) -> LiquidationResponse:
        try:
            updated = await self._repo.mark_paid(db, liquidation_id, payment_date, notes)
            if not updated:
                await self._raise_for_state(db, liquidation_id, "marked paid")
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Liquidation %s marked paid on %s", liquidation_id, payment_date)
        return await self._load(db, liquidation_id)

    async def mark_vendor_signed(
        self, db: AsyncSession, liquidation_id: int
    ) -> LiquidationResponse:
        try:
            updated = await self._repo.mark_vendor_signed(db, liquidation_id)
            if not updated:
                await self._raise_for_state(db, liquidation_id, "signed")
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Liquidation %s signed by vendor", liquidation_id)
        return await self._load(db, liquidation_id)

    async def _raise_for_state(self, db: AsyncSession, liquidation_id: int, action: str) -> None:
        existing = await self._repo.get_liquidation(db, liquidation_id)
        if existing is None:
            raise LiquidationNotFoundError(liquidation_id)
        raise InvalidLiquidationStateError(liquidation_id, existing.state, action)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def _load(self, db: AsyncSession, liquidation_id: int) -> LiquidationResponse:
        liq = await self._repo.get_liquidation(db, liquidation_id)
        if liq is None:
            raise LiquidationNotFoundError(liquidation_id)
        return LiquidationResponse.from_domain(liq)

    async def list_liquidations(
        self, db: AsyncSession, vendor_id: int | None = None, limit: int | None = None
    ) -> LiquidationListResponse:
        if limit is None:
            limit = DEFAULT_VENDOR_LIMIT if vendor_id is not None else DEFAULT_OVERALL_LIMIT
        rows = await self._repo.list_liquidations(db, vendor_id, limit)
        return LiquidationListResponse(items=[LiquidationResponse.from_domain(r) for r in rows])

    async def get_liquidation(
        self, db: AsyncSession, liquidation_id: int
    ) -> LiquidationDetailResponse:
        liq = await self._repo.get_liquidation(db, liquidation_id)
        if liq is None:
            raise LiquidationNotFoundError(liquidation_id)
        details = await self._repo.list_detail_lines(db, liquidation_id)
        advances = await self._entries.list_advances_for_liquidation(db, liquidation_id)
        cash = await self._entries.list_cash_in_hand_for_liquidation(db, liquidation_id)
        return LiquidationDetailResponse(
            **LiquidationResponse.from_domain(liq).model_dump(),
            details=[LiquidationDetailOut.from_domain(d) for d in details],
            applied_advances=[AdvanceItem.from_domain(a) for a in advances],
            applied_cash_in_hand=[CashInHandItem.from_domain(c) for c in cash],
        )
