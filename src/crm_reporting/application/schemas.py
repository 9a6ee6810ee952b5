"""Pydantic schemas for crm_reporting API."""

from decimal import Decimal

from pydantic import BaseModel

from src.crm_common.money import money_to_display, to_money
from src.crm_reporting.domain.models import (
    DashboardTotals,
    SuggestedPeriod,
    VendorBreakdown,
    VendorYearStats,
)


class VendorYearStatsResponse(BaseModel):
    vendor_id: int
    year: int
    liquidation_count: int
    total_base: Decimal
    total_commission: Decimal
    total_commission_display: str
    total_net: Decimal
    total_net_display: str
    total_advances: Decimal
    total_cash_in_hand: Decimal
    average_commission: Decimal
    total_movements: int
    total_clients: int

    @classmethod
    def from_domain(cls, s: VendorYearStats) -> "VendorYearStatsResponse":
        return cls(
            vendor_id=s.vendor_id,
            year=s.year,
            liquidation_count=s.liquidation_count,
            total_base=to_money(s.total_base),
            total_commission=to_money(s.total_commission),
            total_commission_display=money_to_display(s.total_commission),
            total_net=to_money(s.total_net),
            total_net_display=money_to_display(s.total_net),
            total_advances=to_money(s.total_advances),
            total_cash_in_hand=to_money(s.total_cash_in_hand),
            average_commission=to_money(s.average_commission),
            total_movements=s.total_movements,
            total_clients=s.total_clients,
        )


class DashboardTotalsOut(BaseModel):
    active_vendors: int
    liquidation_count: int
    total_commission: Decimal
    total_net: Decimal
    net_paid: Decimal
    net_pending: Decimal
    total_advances: Decimal
    total_cash_in_hand: Decimal

    @classmethod
    def from_domain(cls, t: DashboardTotals) -> "DashboardTotalsOut":
        return cls(
            active_vendors=t.active_vendors,
            liquidation_count=t.liquidation_count,
            total_commission=to_money(t.total_commission),
            total_net=to_money(t.total_net),
            net_paid=to_money(t.net_paid),
            net_pending=to_money(t.net_pending),
            total_advances=to_money(t.total_advances),
            total_cash_in_hand=to_money(t.total_cash_in_hand),
        )


class VendorBreakdownOut(BaseModel):
    vendor_id: int
    vendor_name: str
    liquidation_count: int
    total_commission: Decimal
    total_net: Decimal
    net_paid: Decimal

    @classmethod
    def from_domain(cls, b: VendorBreakdown) -> "VendorBreakdownOut":
        return cls(
            vendor_id=b.vendor_id,
            vendor_name=b.vendor_name,
            liquidation_count=b.liquidation_count,
            total_commission=to_money(b.total_commission),
            total_net=to_money(b.total_net),
            net_paid=to_money(b.net_paid),
        )


class DashboardSummaryResponse(BaseModel):
    year: int
    totals: DashboardTotalsOut
    by_vendor: list[VendorBreakdownOut]


class SuggestedPeriodOut(BaseModel):
    name: str
    date_from: str
    date_to: str

    @classmethod
    def from_domain(cls, p: SuggestedPeriod) -> "SuggestedPeriodOut":
        return cls(name=p.name, date_from=p.date_from.isoformat(), date_to=p.date_to.isoformat())


class SuggestedPeriodsResponse(BaseModel):
    items: list[SuggestedPeriodOut]
