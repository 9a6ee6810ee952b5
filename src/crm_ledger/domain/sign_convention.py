"""Sign convention for movements.

A client's balance is the plain sum of its movement amounts ordered by
(date, id), so the sign is decided once, when the movement is recorded:

  Sale                          -> +abs(amount)
  Payment, Credit note          -> -abs(amount)
  Manual adjustment             -> amount as entered (either sign, non-zero)
  Balance reset                 -> target balance - current balance
"""

from decimal import Decimal

from src.crm_common.enums import MovementKind
from src.crm_common.errors import InvalidMovementError
from src.crm_common.money import ZERO

_POSITIVE_KINDS = {MovementKind.SALE}
_NEGATIVE_KINDS = {MovementKind.PAYMENT, MovementKind.CREDIT_NOTE}


def signed_amount(
    kind: MovementKind, amount: Decimal, current_balance: Decimal = ZERO
) -> Decimal:
    """Return the amount to store for a new movement of `kind`.

    For BALANCE_RESET `amount` is the balance the client should end up with.
    """
    if kind in _POSITIVE_KINDS or kind in _NEGATIVE_KINDS:
        if amount <= ZERO:
            raise InvalidMovementError(f"{kind.value} amount must be positive, got {amount}")
        return abs(amount) if kind in _POSITIVE_KINDS else -abs(amount)
    if kind == MovementKind.MANUAL_ADJUSTMENT:
        if amount == ZERO:
            raise InvalidMovementError("adjustment amount cannot be zero")
        return amount
    if kind == MovementKind.BALANCE_RESET:
        delta = amount - current_balance
        if delta == ZERO:
            raise InvalidMovementError(
                f"target balance {amount} equals the current balance"
            )
        return delta
    raise InvalidMovementError(f"unknown movement kind {kind!r}")
