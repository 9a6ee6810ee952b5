"""Tests for crm_ledger.domain.sign_convention."""

from decimal import Decimal

import pytest

from src.crm_common.enums import MovementKind
from src.crm_common.errors import InvalidMovementError
from src.crm_ledger.domain.sign_convention import signed_amount


class TestFixedSignKinds:
    def test_sale_is_positive(self) -> None:
        assert signed_amount(MovementKind.SALE, Decimal("250")) == Decimal("250")

    def test_payment_is_negative(self) -> None:
        assert signed_amount(MovementKind.PAYMENT, Decimal("10000")) == Decimal("-10000")

    def test_credit_note_is_negative(self) -> None:
        assert signed_amount(MovementKind.CREDIT_NOTE, Decimal("40")) == Decimal("-40")

    @pytest.mark.parametrize(
        "kind", [MovementKind.SALE, MovementKind.PAYMENT, MovementKind.CREDIT_NOTE]
    )
    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5")])
    def test_non_positive_input_rejected(self, kind: MovementKind, amount: Decimal) -> None:
        with pytest.raises(InvalidMovementError):
            signed_amount(kind, amount)


class TestManualAdjustment:
    def test_kept_as_entered(self) -> None:
        assert signed_amount(MovementKind.MANUAL_ADJUSTMENT, Decimal("-12.5")) == Decimal("-12.5")
        assert signed_amount(MovementKind.MANUAL_ADJUSTMENT, Decimal("8")) == Decimal("8")

    def test_zero_rejected(self) -> None:
        with pytest.raises(InvalidMovementError):
            signed_amount(MovementKind.MANUAL_ADJUSTMENT, Decimal("0"))


class TestBalanceReset:
    def test_stores_delta_to_target(self) -> None:
        assert signed_amount(
            MovementKind.BALANCE_RESET, Decimal("0"), current_balance=Decimal("350")
        ) == Decimal("-350")

    def test_target_above_current(self) -> None:
        assert signed_amount(
            MovementKind.BALANCE_RESET, Decimal("100"), current_balance=Decimal("-20")
        ) == Decimal("120")

    def test_no_change_rejected(self) -> None:
        with pytest.raises(InvalidMovementError, match="equals the current balance"):
            signed_amount(MovementKind.BALANCE_RESET, Decimal("50"), Decimal("50"))
