"""Commission calculator - pure function over a config snapshot and movements.

Rules:
  - the basis decides which movement kinds are eligible (ELIGIBLE_KINDS);
  - eligible base of a movement is abs(amount), regardless of stored sign;
  - total_commission = max(total_base * pct / 100, minimum). The floor is
    applied once to the total; detail lines keep their pre-floor share, so
    they sum to the pre-floor value, not to total_commission when the floor
    is engaged.
  - no rounding here; callers round at display/persist time.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import Decimal

from src.crm_commission.domain.models import (
    CommissionCalculation,
    CommissionDetailLine,
    VendorCommissionConfig,
)
from src.crm_common.enums import CommissionBasis, MovementKind
from src.crm_common.errors import InvalidCommissionConfigError, InvalidRangeError
from src.crm_common.money import ZERO, percentage_of
from src.crm_ledger.domain.models import Movement

ELIGIBLE_KINDS: dict[str, frozenset[str]] = {
    CommissionBasis.ON_SALES.value: frozenset({MovementKind.SALE.value}),
    CommissionBasis.ON_PAYMENTS.value: frozenset({MovementKind.PAYMENT.value}),
    CommissionBasis.ON_COLLECTIONS.value: frozenset(
        {MovementKind.PAYMENT.value, MovementKind.CREDIT_NOTE.value}
    ),
}


def eligible_kinds(basis: str) -> frozenset[str]:
    try:
        return ELIGIBLE_KINDS[str(getattr(basis, "value", basis))]
    except KeyError:
        raise InvalidCommissionConfigError(f"unknown basis {basis!r}") from None


def is_eligible(basis: str, kind: str) -> bool:
    return str(getattr(kind, "value", kind)) in eligible_kinds(basis)


def calculate_commission(
    config: VendorCommissionConfig,
    movements: Iterable[Movement],
    date_from: date,
    date_to: date,
) -> CommissionCalculation:
    if date_from > date_to:
        raise InvalidRangeError(date_from, date_to)

    pct = config.percentage
    ordered = sorted(movements, key=lambda m: (m.movement_date, m.id))

    total_base = ZERO
    clients: set[int] = set()
    details: list[CommissionDetailLine] = []
    for mov in ordered:
        # The query may already be scoped by kind; the predicate still decides.
        if not is_eligible(config.basis, mov.kind):
            continue
        if not (date_from <= mov.movement_date <= date_to):
            continue
        base = abs(mov.amount)
        total_base += base
        clients.add(mov.client_id)
        details.append(
            CommissionDetailLine(
                movement_id=mov.id,
                client_id=mov.client_id,
                client_name=mov.client_name,
                movement_date=mov.movement_date,
                movement_kind=mov.kind,
                movement_amount=mov.amount,
                eligible_base=base,
                percentage=pct,
                commission=percentage_of(base, pct),
            )
        )

    pre_floor = percentage_of(total_base, pct)
    total_commission = max(pre_floor, config.minimum or ZERO)

    return CommissionCalculation(
        vendor_id=config.vendor_id,
        vendor_name=config.vendor_name,
        date_from=date_from,
        date_to=date_to,
        config=replace(config),
        total_base=total_base,
        pre_floor_commission=pre_floor,
        total_commission=total_commission,
        movement_count=len(details),
        client_count=len(clients),
        details=tuple(details),
    )
