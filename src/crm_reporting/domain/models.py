"""Read models for crm_reporting. Annulled liquidations never contribute."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class VendorYearStats:
    vendor_id: int
    year: int
    liquidation_count: int
    total_base: Decimal
    total_commission: Decimal
    total_net: Decimal
    total_advances: Decimal
    total_cash_in_hand: Decimal
    average_commission: Decimal
    total_movements: int
    total_clients: int


@dataclass(frozen=True)
class DashboardTotals:
    active_vendors: int
    liquidation_count: int
    total_commission: Decimal
    total_net: Decimal
    net_paid: Decimal
    net_pending: Decimal
    total_advances: Decimal
    total_cash_in_hand: Decimal


@dataclass(frozen=True)
class VendorBreakdown:
    vendor_id: int
    vendor_name: str
    liquidation_count: int
    total_commission: Decimal
    total_net: Decimal
    net_paid: Decimal


@dataclass(frozen=True)
class SuggestedPeriod:
    name: str
    date_from: date
    date_to: date
