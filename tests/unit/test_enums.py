"""Enum values must match the CHECK constraints in the migrations."""

from src.crm_common.enums import (
    AdjustmentState,
    CommissionBasis,
    LiquidationState,
    MovementKind,
    UserRole,
)


class TestEnumValues:
    def test_movement_kinds(self) -> None:
        assert {k.value for k in MovementKind} == {
            "Venta", "Pago", "Nota de Crédito", "Ajuste de Saldo", "Reestablecimiento",
        }

    def test_commission_basis(self) -> None:
        assert {b.value for b in CommissionBasis} == {"venta", "pago", "cobro"}

    def test_adjustment_states(self) -> None:
        assert {s.value for s in AdjustmentState} == {"pendiente", "aplicado", "cancelado"}

    def test_liquidation_states(self) -> None:
        assert {s.value for s in LiquidationState} == {"calculada", "pagada", "anulada"}

    def test_roles(self) -> None:
        assert UserRole.ADMIN.value == "admin"
        assert UserRole.SALES.value == "vendedor"

    def test_str_enum_compares_to_value(self) -> None:
        assert MovementKind.PAYMENT == "Pago"
        assert CommissionBasis("cobro") is CommissionBasis.ON_COLLECTIONS
