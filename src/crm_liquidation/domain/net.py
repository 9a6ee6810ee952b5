"""Net payable for a liquidation.

    net = gross - advances - cash_in_hand - other_discounts + other_bonuses

No floor is applied: a negative net means the vendor owes the company.
"""

from decimal import Decimal

from src.crm_liquidation.domain.models import SettlementAdjustments


def compute_net(gross: Decimal, adjustments: SettlementAdjustments) -> Decimal:
    return (
        gross
        - adjustments.advances
        - adjustments.cash_in_hand
        - adjustments.other_discounts
        + adjustments.other_bonuses
    )
