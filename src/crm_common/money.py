"""Decimal money utilities.

Amounts are `Decimal`, never float. Sums and percentages are computed at full
precision; `to_money` rounds to 2 digits and is only called where a value is
displayed or persisted.
"""

from decimal import ROUND_HALF_UP, Decimal

from config.settings import settings

CENT = Decimal("0.01")
ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_money(value: Decimal | int | str) -> Decimal:
    """Round to 2 decimal places, half up: Decimal('12.345') -> Decimal('12.35')."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def is_whole_cents(value: Decimal) -> bool:
    """True when value fits NUMERIC(14,2) without rounding: 10.50 yes, 10.005 no."""
    return value == value.quantize(CENT)


def percentage_of(amount: Decimal, pct: Decimal) -> Decimal:
    """amount * pct / 100, unrounded."""
    return amount * pct / HUNDRED


def validate_percentage(pct: Decimal) -> None:
    """Validate that a commission percentage is within [0, 100]."""
    if not (ZERO <= pct <= HUNDRED):
        raise ValueError(f"Percentage must be between 0 and 100, got {pct}")


def money_to_display(value: Decimal) -> str:
    """Format for display: Decimal('1500') -> '$1,500.00', Decimal('-12') -> '-$12.00'."""
    amount = to_money(value)
    symbol = settings.CURRENCY_SYMBOL
    if amount < 0:
        return f"-{symbol}{-amount:,.2f}"
    return f"{symbol}{abs(amount):,.2f}"
