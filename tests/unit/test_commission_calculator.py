"""Unit tests for the pure commission calculator."""

from datetime import date
from decimal import Decimal

import pytest

from src.crm_commission.domain.calculator import (
    calculate_commission,
    eligible_kinds,
    is_eligible,
)
from src.crm_commission.domain.models import VendorCommissionConfig
from src.crm_common.errors import InvalidCommissionConfigError, InvalidRangeError
from src.crm_common.money import to_money
from src.crm_ledger.domain.models import Movement

FROM = date(2026, 3, 1)
TO = date(2026, 3, 31)


def _make_config(
    pct: str = "15", basis: str = "pago", minimum: str = "0"
) -> VendorCommissionConfig:
    return VendorCommissionConfig(
        id=1,
        vendor_id=2,
        vendor_name="Lucía",
        vendor_role="vendedor",
        percentage=Decimal(pct),
        basis=basis,
        minimum=Decimal(minimum),
        comment="",
        active=True,
        effective_from=date(2026, 1, 1),
    )


def _mov(mov_id: int, kind: str, amount: str, day: int = 10, client_id: int = 10) -> Movement:
    return Movement(
        id=mov_id,
        movement_date=date(2026, 3, day),
        client_id=client_id,
        vendor_id=2,
        kind=kind,
        amount=Decimal(amount),
    )


MIXED = [
    _mov(1, "Venta", "20000", day=2),
    _mov(2, "Pago", "-10000", day=5),
    _mov(3, "Nota de Crédito", "-500", day=6, client_id=11),
    _mov(4, "Ajuste de Saldo", "-50", day=7),
    _mov(5, "Reestablecimiento", "-9450", day=8),
]


class TestEligibility:
    def test_sales_basis(self) -> None:
        assert eligible_kinds("venta") == frozenset({"Venta"})

    def test_payments_basis(self) -> None:
        assert eligible_kinds("pago") == frozenset({"Pago"})

    def test_collections_basis(self) -> None:
        assert eligible_kinds("cobro") == frozenset({"Pago", "Nota de Crédito"})

    def test_adjustments_never_eligible(self) -> None:
        for basis in ("venta", "pago", "cobro"):
            assert not is_eligible(basis, "Ajuste de Saldo")
            assert not is_eligible(basis, "Reestablecimiento")

    def test_unknown_basis(self) -> None:
        with pytest.raises(InvalidCommissionConfigError):
            eligible_kinds("mensual")


class TestScenarios:
    def test_payment_basis_commission(self) -> None:
        """15 % on a stored -10000 payment -> base 10000, commission 1500."""
        calc = calculate_commission(_make_config(), [_mov(1, "Pago", "-10000")], FROM, TO)

        assert calc.total_base == Decimal("10000")
        assert calc.total_commission == Decimal("1500")
        assert calc.movement_count == 1
        assert calc.client_count == 1
        assert calc.details[0].eligible_base == Decimal("10000")
        assert calc.details[0].movement_amount == Decimal("-10000")

    def test_floor_engaged_detail_keeps_pre_floor_value(self) -> None:
        calc = calculate_commission(
            _make_config(minimum="500"), [_mov(1, "Pago", "-2000")], FROM, TO
        )

        assert calc.total_commission == Decimal("500")
        assert calc.pre_floor_commission == Decimal("300")
        assert calc.details[0].commission == Decimal("300")
        assert calc.floor_applied is True

    def test_no_movements_with_minimum(self) -> None:
        calc = calculate_commission(_make_config(minimum="250"), [], FROM, TO)

        assert calc.total_base == 0
        assert calc.total_commission == Decimal("250")
        assert calc.details == ()

    def test_zero_percentage(self) -> None:
        calc = calculate_commission(_make_config(pct="0"), MIXED, FROM, TO)
        assert calc.total_commission == 0
        assert calc.floor_applied is False


class TestFloorInvariant:
    @pytest.mark.parametrize("minimum", ["0", "100", "1500", "99999"])
    @pytest.mark.parametrize("basis", ["venta", "pago", "cobro"])
    def test_total_is_max_of_computed_and_minimum(self, basis: str, minimum: str) -> None:
        config = _make_config(pct="7.5", basis=basis, minimum=minimum)
        calc = calculate_commission(config, MIXED, FROM, TO)

        expected = max(calc.total_base * Decimal("7.5") / 100, Decimal(minimum))
        assert calc.total_commission == expected


class TestPartitioning:
    def test_changing_basis_changes_inclusion_not_signs(self) -> None:
        on_sales = calculate_commission(_make_config(basis="venta"), MIXED, FROM, TO)
        on_payments = calculate_commission(_make_config(basis="pago"), MIXED, FROM, TO)

        assert [d.movement_id for d in on_sales.details] == [1]
        assert [d.movement_id for d in on_payments.details] == [2]
        assert on_sales.details[0].movement_amount == Decimal("20000")
        assert on_payments.details[0].movement_amount == Decimal("-10000")
        assert [m.amount for m in MIXED][1] == Decimal("-10000")

    def test_collections_include_credit_notes(self) -> None:
        calc = calculate_commission(_make_config(basis="cobro"), MIXED, FROM, TO)

        assert [d.movement_id for d in calc.details] == [2, 3]
        assert calc.total_base == Decimal("10500")
        assert calc.client_count == 2

    def test_out_of_period_rows_ignored(self) -> None:
        rows = [_mov(1, "Pago", "-100", day=1), _mov(2, "Pago", "-100", day=31)]
        calc = calculate_commission(_make_config(), rows, date(2026, 3, 2), date(2026, 3, 30))
        assert calc.movement_count == 0


class TestDeterminism:
    def test_same_inputs_give_equal_results(self) -> None:
        first = calculate_commission(_make_config(), MIXED, FROM, TO)
        second = calculate_commission(_make_config(), list(reversed(MIXED)), FROM, TO)
        assert first == second

    def test_details_ordered_by_date_then_id(self) -> None:
        rows = [
            _mov(9, "Pago", "-1", day=4),
            _mov(3, "Pago", "-1", day=4),
            _mov(1, "Pago", "-1", day=9),
        ]
        calc = calculate_commission(_make_config(), rows, FROM, TO)
        assert [d.movement_id for d in calc.details] == [3, 9, 1]

    def test_config_snapshot_is_a_copy(self) -> None:
        config = _make_config()
        calc = calculate_commission(config, [], FROM, TO)
        assert calc.config == config
        assert calc.config is not config


class TestRangeAndRounding:
    def test_inverted_range(self) -> None:
        with pytest.raises(InvalidRangeError):
            calculate_commission(_make_config(), [], TO, FROM)

    def test_single_day_period(self) -> None:
        calc = calculate_commission(
            _make_config(), [_mov(1, "Pago", "-10", day=10)], date(2026, 3, 10), date(2026, 3, 10)
        )
        assert calc.movement_count == 1

    def test_full_precision_until_rounded(self) -> None:
        calc = calculate_commission(
            _make_config(pct="2.5"), [_mov(1, "Pago", "-33.33")], FROM, TO
        )
        assert calc.total_commission == Decimal("0.83325")
        assert to_money(calc.total_commission) == Decimal("0.83")
