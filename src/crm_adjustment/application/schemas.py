"""Pydantic schemas for crm_adjustment API.

Amounts carry at most 2 decimal places. Sign is not checked here: the
service rejects non-positive amounts with InvalidAmountError so callers get
a domain error code.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.crm_adjustment.domain.models import (
    AdjustmentSummary,
    AdvanceEntry,
    CashInHandEntry,
)
from src.crm_common.money import money_to_display, to_money

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RegisterAdvanceRequest(BaseModel):
    vendor_id: int = Field(..., gt=0)
    entry_date: date
    amount: Decimal = Field(..., max_digits=14, decimal_places=2)
    reason: str = Field("", max_length=500)


class RegisterCashInHandRequest(BaseModel):
    vendor_id: int = Field(..., gt=0)
    entry_date: date
    client_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., max_digits=14, decimal_places=2)
    concept: str = Field("", max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AdvanceItem(BaseModel):
    id: int
    vendor_id: int
    entry_date: str
    amount: Decimal
    amount_display: str
    reason: str
    state: str
    liquidation_id: int | None

    @classmethod
    def from_domain(cls, e: AdvanceEntry) -> "AdvanceItem":
        return cls(
            id=e.id,
            vendor_id=e.vendor_id,
            entry_date=e.entry_date.isoformat(),
            amount=to_money(e.amount),
            amount_display=money_to_display(e.amount),
            reason=e.reason,
            state=e.state,
            liquidation_id=e.liquidation_id,
        )


class CashInHandItem(BaseModel):
    id: int
    vendor_id: int
    entry_date: str
    client_id: int
    client_name: str | None
    amount: Decimal
    amount_display: str
    concept: str
    state: str
    liquidation_id: int | None

    @classmethod
    def from_domain(cls, e: CashInHandEntry) -> "CashInHandItem":
        return cls(
            id=e.id,
            vendor_id=e.vendor_id,
            entry_date=e.entry_date.isoformat(),
            client_id=e.client_id,
            client_name=e.client_name,
            amount=to_money(e.amount),
            amount_display=money_to_display(e.amount),
            concept=e.concept,
            state=e.state,
            liquidation_id=e.liquidation_id,
        )


class AdvanceListResponse(BaseModel):
    items: list[AdvanceItem]


class CashInHandListResponse(BaseModel):
    items: list[CashInHandItem]


class AdjustmentSummaryResponse(BaseModel):
    vendor_id: int
    advances_pending: Decimal
    cash_in_hand_pending: Decimal
    total: Decimal
    total_display: str

    @classmethod
    def from_domain(cls, vendor_id: int, s: AdjustmentSummary) -> "AdjustmentSummaryResponse":
        return cls(
            vendor_id=vendor_id,
            advances_pending=to_money(s.advances_pending),
            cash_in_hand_pending=to_money(s.cash_in_hand_pending),
            total=to_money(s.total),
            total_display=money_to_display(s.total),
        )
