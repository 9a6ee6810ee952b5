"""Domain models for crm_adjustment - pure dataclasses, no SQLAlchemy dependency.

Both ledgers hold money that reduces what a vendor is owed at liquidation:
advances already paid to the vendor, and collections the vendor is still
holding. Entry state moves pending -> applied (by a liquidation) or
pending -> cancelled, never back.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class AdvanceEntry:
    id: int
    vendor_id: int
    entry_date: date
    amount: Decimal
    reason: str
    state: str                       # AdjustmentState value
    liquidation_id: int | None = None
    created_at: datetime | None = None


@dataclass
class CashInHandEntry:
    id: int
    vendor_id: int
    entry_date: date
    client_id: int
    amount: Decimal
    concept: str
    state: str                       # AdjustmentState value
    liquidation_id: int | None = None
    client_name: str | None = None
    created_at: datetime | None = None


@dataclass
class AdjustmentSummary:
    advances_pending: Decimal
    cash_in_hand_pending: Decimal

    @property
    def total(self) -> Decimal:
        return self.advances_pending + self.cash_in_hand_pending
