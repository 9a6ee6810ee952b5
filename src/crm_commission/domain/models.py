"""Domain models for crm_commission - pure dataclasses, no SQLAlchemy dependency.

Calculation objects are frozen: a CommissionCalculation is a value, two
calculations over the same inputs compare equal.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Vendor:
    id: int
    name: str
    role: str          # UserRole value
    active: bool = True


@dataclass(frozen=True)
class VendorCommissionConfig:
    id: int
    vendor_id: int
    vendor_name: str
    vendor_role: str
    percentage: Decimal      # 0..100
    basis: str               # CommissionBasis value
    minimum: Decimal         # guaranteed minimum commission per liquidation
    comment: str
    active: bool
    effective_from: date
    updated_at: datetime | None = None


@dataclass(frozen=True)
class CommissionDetailLine:
    movement_id: int
    client_id: int
    client_name: str | None
    movement_date: date
    movement_kind: str
    movement_amount: Decimal   # signed, as stored
    eligible_base: Decimal     # abs(movement_amount)
    percentage: Decimal
    commission: Decimal        # eligible_base * percentage / 100, before any floor


@dataclass(frozen=True)
class CommissionCalculation:
    vendor_id: int
    vendor_name: str
    date_from: date
    date_to: date
    config: VendorCommissionConfig
    total_base: Decimal
    pre_floor_commission: Decimal
    total_commission: Decimal
    movement_count: int
    client_count: int
    details: tuple[CommissionDetailLine, ...]

    @property
    def floor_applied(self) -> bool:
        return self.total_commission > self.pre_floor_commission
