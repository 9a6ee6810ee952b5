"""Pydantic schemas for crm_ledger API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from src.crm_common.enums import MovementKind
from src.crm_common.money import money_to_display, to_money
from src.crm_ledger.domain.models import Movement, StatementLine

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RecordMovementRequest(BaseModel):
    movement_date: date
    client_id: int = Field(..., gt=0)
    vendor_id: int = Field(..., gt=0)
    kind: MovementKind
    amount: Decimal = Field(
        ...,
        max_digits=14,
        decimal_places=2,
        description="Unsigned for sales/payments/credit notes; target balance for a reset",
    )
    document: str | None = Field(None, max_length=50)
    note: str | None = Field(None, max_length=500)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class MovementItem(BaseModel):
    id: int
    movement_date: str  # ISO date
    client_id: int
    client_name: str | None
    vendor_id: int
    kind: str
    document: str | None
    amount: Decimal
    amount_display: str
    note: str | None

    @classmethod
    def from_domain(cls, m: Movement) -> "MovementItem":
        return cls(
            id=m.id,
            movement_date=m.movement_date.isoformat(),
            client_id=m.client_id,
            client_name=m.client_name,
            vendor_id=m.vendor_id,
            kind=m.kind,
            document=m.document,
            amount=to_money(m.amount),
            amount_display=money_to_display(m.amount),
            note=m.note,
        )


class StatementLineItem(MovementItem):
    running_balance: Decimal
    running_balance_display: str

    @classmethod
    def from_line(cls, line: StatementLine) -> "StatementLineItem":
        base = MovementItem.from_domain(line.movement)
        return cls(
            **base.model_dump(),
            running_balance=to_money(line.running_balance),
            running_balance_display=money_to_display(line.running_balance),
        )


class ClientStatementResponse(BaseModel):
    client_id: int
    client_name: str
    lines: list[StatementLineItem]
    balance: Decimal
    balance_display: str


class MovementListResponse(BaseModel):
    items: list[MovementItem]
