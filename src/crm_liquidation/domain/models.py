"""Domain models for crm_liquidation - pure dataclasses, no SQLAlchemy dependency.

A Liquidation is the persisted settlement of one CommissionCalculation. Its
detail lines are a frozen copy of the calculation's lines, so later movement
changes never alter a past liquidation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal

from src.crm_common.errors import InvalidAmountError
from src.crm_common.money import ZERO, is_whole_cents, to_money


@dataclass(frozen=True)
class SettlementAdjustments:
    """Manual amounts and payment metadata supplied when settling."""

    advances: Decimal = ZERO
    cash_in_hand: Decimal = ZERO
    other_discounts: Decimal = ZERO
    other_bonuses: Decimal = ZERO
    payment_method: str | None = None
    payment_reference: str = ""
    notes: str = ""
    delivery_date: date | None = None

    def validate(self) -> None:
        for name in ("advances", "cash_in_hand", "other_discounts", "other_bonuses"):
            amount = getattr(self, name)
            if amount < ZERO or not is_whole_cents(amount):
                raise InvalidAmountError(name, amount)

    def rounded(self) -> "SettlementAdjustments":
        return SettlementAdjustments(
            advances=to_money(self.advances),
            cash_in_hand=to_money(self.cash_in_hand),
            other_discounts=to_money(self.other_discounts),
            other_bonuses=to_money(self.other_bonuses),
            payment_method=self.payment_method,
            payment_reference=self.payment_reference,
            notes=self.notes,
            delivery_date=self.delivery_date,
        )


@dataclass
class LiquidationDetailLine:
    id: int
    liquidation_id: int
    movement_id: int
    client_id: int
    client_name: str | None
    movement_date: date
    movement_kind: str
    movement_amount: Decimal
    eligible_base: Decimal
    percentage: Decimal
    commission: Decimal


@dataclass
class Liquidation:
    id: int
    vendor_id: int
    vendor_name: str | None
    period_from: date
    period_to: date
    basis: str
    percentage: Decimal
    total_base: Decimal
    total_commission: Decimal        # gross, after the minimum floor
    movement_count: int
    client_count: int
    advances_applied: Decimal
    cash_in_hand_applied: Decimal
    other_discounts: Decimal
    other_bonuses: Decimal
    total_net: Decimal               # may be negative: vendor owes the company
    payment_method: str
    payment_reference: str
    notes: str
    state: str                       # LiquidationState value
    vendor_signed: bool = False
    admin_signed: bool = False
    delivery_date: date | None = None
    payment_date: date | None = None
    payment_notes: str | None = None
    created_at: datetime | None = None
    details: list[LiquidationDetailLine] = field(default_factory=list)
