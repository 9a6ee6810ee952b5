"""Domain models for crm_ledger - pure dataclasses, no SQLAlchemy dependency."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal


@dataclass
class Client:
    id: int
    legal_name: str
    vendor_id: int | None
    active: bool = True


@dataclass
class Movement:
    id: int
    movement_date: date
    client_id: int
    vendor_id: int
    kind: str                 # MovementKind value
    amount: Decimal           # signed: + increases what the client owes, - decreases it
    document: str | None = None
    note: str | None = None
    client_name: str | None = None
    created_at: datetime | None = None


@dataclass
class StatementLine:
    movement: Movement
    running_balance: Decimal
