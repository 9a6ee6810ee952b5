"""Liquidation engine - persist a settlement inside the caller's transaction.

Sequence (all in one transaction, caller commits or rolls back; the caller
already holds the per-vendor advisory lock):
  1. round gross and adjustments to cents, compute net
  2. insert the liquidation row (state 'calculada')
  3. insert one detail line per calculation line
  4. advances > 0     -> mark ALL pending advances of the vendor applied
  5. cash_in_hand > 0 -> mark ALL pending cash-in-hand entries applied

Steps 4 and 5 are bulk marks: the entries are not matched against the
amount entered by the operator.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_adjustment.domain.repository import AdjustmentRepositoryProtocol
from src.crm_commission.domain.models import CommissionCalculation
from src.crm_common.money import ZERO, to_money
from src.crm_liquidation.domain.models import SettlementAdjustments
from src.crm_liquidation.domain.net import compute_net
from src.crm_liquidation.domain.repository import LiquidationRepositoryProtocol

logger = logging.getLogger(__name__)


async def settle(
    db: AsyncSession,
    calc: CommissionCalculation,
    adjustments: SettlementAdjustments,
    liquidations: LiquidationRepositoryProtocol,
    entries: AdjustmentRepositoryProtocol,
) -> int:
    """Write the liquidation and its trail. Returns the new liquidation id."""
    gross = to_money(calc.total_commission)
    rounded = adjustments.rounded()
    total_net = compute_net(gross, rounded)

    liquidation_id = await liquidations.insert_liquidation(db, calc, gross, rounded, total_net)
    await liquidations.insert_detail_lines(db, liquidation_id, calc.details)

    if rounded.advances > ZERO:
        applied = await entries.mark_pending_advances_applied(
            db, calc.vendor_id, liquidation_id
        )
        logger.debug("Liquidation %s applied %d advance entries", liquidation_id, applied)
    if rounded.cash_in_hand > ZERO:
        applied = await entries.mark_pending_cash_in_hand_applied(
            db, calc.vendor_id, liquidation_id
        )
        logger.debug("Liquidation %s applied %d cash-in-hand entries", liquidation_id, applied)

    return liquidation_id
