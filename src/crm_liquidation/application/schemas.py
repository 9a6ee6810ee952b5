"""Pydantic schemas for crm_liquidation API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.crm_adjustment.application.schemas import AdvanceItem, CashInHandItem
from src.crm_commission.application.schemas import CalculationResponse
from src.crm_common.money import ZERO, money_to_display, to_money
from src.crm_liquidation.domain.models import Liquidation, LiquidationDetailLine

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class SettleRequest(BaseModel):
    vendor_id: int = Field(..., gt=0)
    date_from: date
    date_to: date
    advances: Decimal = Field(ZERO, max_digits=14, decimal_places=2)
    cash_in_hand: Decimal = Field(ZERO, max_digits=14, decimal_places=2)
    other_discounts: Decimal = Field(ZERO, max_digits=14, decimal_places=2)
    other_bonuses: Decimal = Field(ZERO, max_digits=14, decimal_places=2)
    payment_method: str | None = Field(None, max_length=50)
    payment_reference: str = Field("", max_length=200)
    notes: str = Field("", max_length=1000)
    delivery_date: date | None = None


class MarkPaidRequest(BaseModel):
    payment_date: date
    notes: str | None = Field(None, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class LiquidationDetailOut(BaseModel):
    movement_id: int
    client_id: int
    client_name: str | None
    movement_date: str
    movement_kind: str
    movement_amount: Decimal
    eligible_base: Decimal
    percentage: Decimal
    commission: Decimal

    @classmethod
    def from_domain(cls, d: LiquidationDetailLine) -> "LiquidationDetailOut":
        return cls(
            movement_id=d.movement_id,
            client_id=d.client_id,
            client_name=d.client_name,
            movement_date=d.movement_date.isoformat(),
            movement_kind=d.movement_kind,
            movement_amount=to_money(d.movement_amount),
            eligible_base=to_money(d.eligible_base),
            percentage=d.percentage,
            commission=to_money(d.commission),
        )


class LiquidationResponse(BaseModel):
    id: int
    vendor_id: int
    vendor_name: str | None
    period_from: str
    period_to: str
    basis: str
    percentage: Decimal
    total_base: Decimal
    total_commission: Decimal
    total_commission_display: str
    movement_count: int
    client_count: int
    advances_applied: Decimal
    cash_in_hand_applied: Decimal
    other_discounts: Decimal
    other_bonuses: Decimal
    total_net: Decimal
    total_net_display: str
    payment_method: str
    payment_reference: str
    notes: str
    delivery_date: str | None
    state: str
    vendor_signed: bool
    admin_signed: bool
    payment_date: str | None
    payment_notes: str | None

    @classmethod
    def from_domain(cls, liq: Liquidation) -> "LiquidationResponse":
        return cls(
            id=liq.id,
            vendor_id=liq.vendor_id,
            vendor_name=liq.vendor_name,
            period_from=liq.period_from.isoformat(),
            period_to=liq.period_to.isoformat(),
            basis=liq.basis,
            percentage=liq.percentage,
            total_base=to_money(liq.total_base),
            total_commission=to_money(liq.total_commission),
            total_commission_display=money_to_display(liq.total_commission),
            movement_count=liq.movement_count,
            client_count=liq.client_count,
            advances_applied=to_money(liq.advances_applied),
            cash_in_hand_applied=to_money(liq.cash_in_hand_applied),
            other_discounts=to_money(liq.other_discounts),
            other_bonuses=to_money(liq.other_bonuses),
            total_net=to_money(liq.total_net),
            total_net_display=money_to_display(liq.total_net),
            payment_method=liq.payment_method,
            payment_reference=liq.payment_reference,
            notes=liq.notes,
            delivery_date=liq.delivery_date.isoformat() if liq.delivery_date else None,
            state=liq.state,
            vendor_signed=liq.vendor_signed,
            admin_signed=liq.admin_signed,
            payment_date=liq.payment_date.isoformat() if liq.payment_date else None,
            payment_notes=liq.payment_notes,
        )


class LiquidationListResponse(BaseModel):
    items: list[LiquidationResponse]


class LiquidationDetailResponse(LiquidationResponse):
    details: list[LiquidationDetailOut]
    applied_advances: list[AdvanceItem]
    applied_cash_in_hand: list[CashInHandItem]


class SettleResponse(BaseModel):
    liquidation_id: int
    calculation: CalculationResponse
    total_net: Decimal
    total_net_display: str
