"""Pydantic schemas for crm_commission API.

Money fields are rounded to 2 digits here, at the response boundary; the
domain objects they are built from keep full precision.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.crm_commission.domain.models import (
    CommissionCalculation,
    CommissionDetailLine,
    VendorCommissionConfig,
)
from src.crm_common.enums import CommissionBasis
from src.crm_common.money import money_to_display, to_money

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class UpdateConfigRequest(BaseModel):
    percentage: Decimal = Field(..., ge=0, le=100, max_digits=5, decimal_places=2)
    basis: CommissionBasis
    minimum: Decimal = Field(Decimal("0"), ge=0, max_digits=14, decimal_places=2)
    comment: str = Field("", max_length=500)


class PeriodRequest(BaseModel):
    vendor_id: int = Field(..., gt=0)
    date_from: date
    date_to: date


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ConfigResponse(BaseModel):
    id: int
    vendor_id: int
    vendor_name: str
    vendor_role: str
    percentage: Decimal
    basis: str
    minimum: Decimal
    minimum_display: str
    comment: str
    active: bool
    effective_from: str  # ISO date

    @classmethod
    def from_domain(cls, c: VendorCommissionConfig) -> "ConfigResponse":
        return cls(
            id=c.id,
            vendor_id=c.vendor_id,
            vendor_name=c.vendor_name,
            vendor_role=c.vendor_role,
            percentage=c.percentage,
            basis=c.basis,
            minimum=to_money(c.minimum),
            minimum_display=money_to_display(c.minimum),
            comment=c.comment,
            active=c.active,
            effective_from=c.effective_from.isoformat(),
        )


class ConfigListResponse(BaseModel):
    items: list[ConfigResponse]


class DetailLineOut(BaseModel):
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
    def from_domain(cls, d: CommissionDetailLine) -> "DetailLineOut":
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


class CalculationResponse(BaseModel):
    vendor_id: int
    vendor_name: str
    date_from: str
    date_to: str
    config: ConfigResponse
    total_base: Decimal
    total_base_display: str
    pre_floor_commission: Decimal
    total_commission: Decimal
    total_commission_display: str
    floor_applied: bool
    movement_count: int
    client_count: int
    details: list[DetailLineOut]

    @classmethod
    def from_domain(cls, calc: CommissionCalculation) -> "CalculationResponse":
        return cls(
            vendor_id=calc.vendor_id,
            vendor_name=calc.vendor_name,
            date_from=calc.date_from.isoformat(),
            date_to=calc.date_to.isoformat(),
            config=ConfigResponse.from_domain(calc.config),
            total_base=to_money(calc.total_base),
            total_base_display=money_to_display(calc.total_base),
            pre_floor_commission=to_money(calc.pre_floor_commission),
            total_commission=to_money(calc.total_commission),
            total_commission_display=money_to_display(calc.total_commission),
            floor_applied=calc.floor_applied,
            movement_count=calc.movement_count,
            client_count=calc.client_count,
            details=[DetailLineOut.from_domain(d) for d in calc.details],
        )
