"""Unit tests for LedgerApplicationService using a mock repository."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.crm_common.enums import MovementKind
from src.crm_common.errors import ClientNotFoundError, InvalidMovementError, InvalidRangeError
from src.crm_ledger.application.service import LedgerApplicationService
from src.crm_ledger.domain.models import Client, Movement


def _make_client(client_id: int = 10) -> Client:
    return Client(id=client_id, legal_name="Ferretería Sur", vendor_id=2)


def _make_movement(
    mov_id: int = 1,
    kind: str = "Pago",
    amount: str = "-100",
    day: int = 5,
) -> Movement:
    return Movement(
        id=mov_id,
        movement_date=date(2026, 3, day),
        client_id=10,
        vendor_id=2,
        kind=kind,
        amount=Decimal(amount),
        client_name="Ferretería Sur",
    )


class TestRecordMovement:
    async def test_payment_stored_negative(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = _make_client()
        repo.insert_movement.return_value = _make_movement(amount="-100")
        svc = LedgerApplicationService(repo=repo)
        db = AsyncMock()

        result = await svc.record_movement(
            db, date(2026, 3, 5), 10, 2, MovementKind.PAYMENT, Decimal("100")
        )

        args = repo.insert_movement.call_args.args
        assert args[4] == "Pago"
        assert args[5] == Decimal("-100")
        assert result.amount == Decimal("-100.00")
        assert result.client_name == "Ferretería Sur"
        db.commit.assert_awaited_once()
        repo.get_client_balance.assert_not_awaited()

    async def test_balance_reset_uses_current_balance(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = _make_client()
        repo.get_client_balance.return_value = Decimal("350")
        repo.insert_movement.return_value = _make_movement(kind="Reestablecimiento", amount="-350")
        svc = LedgerApplicationService(repo=repo)
        db = AsyncMock()

        await svc.record_movement(
            db, date(2026, 3, 5), 10, 2, MovementKind.BALANCE_RESET, Decimal("0")
        )

        assert repo.insert_movement.call_args.args[5] == Decimal("-350")

    async def test_unknown_client_rolls_back(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = None
        svc = LedgerApplicationService(repo=repo)
        db = AsyncMock()

        with pytest.raises(ClientNotFoundError):
            await svc.record_movement(
                db, date(2026, 3, 5), 99, 2, MovementKind.SALE, Decimal("10")
            )
        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()
        repo.insert_movement.assert_not_awaited()

    async def test_invalid_amount_rolls_back(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = _make_client()
        svc = LedgerApplicationService(repo=repo)
        db = AsyncMock()

        with pytest.raises(InvalidMovementError):
            await svc.record_movement(
                db, date(2026, 3, 5), 10, 2, MovementKind.SALE, Decimal("0")
            )
        db.rollback.assert_awaited_once()


class TestClientStatement:
    async def test_running_balance(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = _make_client()
        repo.list_for_client.return_value = [
            _make_movement(1, "Venta", "1000", day=1),
            _make_movement(2, "Pago", "-400", day=2),
            _make_movement(3, "Nota de Crédito", "-100", day=3),
        ]
        svc = LedgerApplicationService(repo=repo)

        result = await svc.client_statement(MagicMock(), 10)

        assert [line.running_balance for line in result.lines] == [
            Decimal("1000.00"), Decimal("600.00"), Decimal("500.00"),
        ]
        assert result.balance == Decimal("500.00")
        assert result.balance_display == "$500.00"

    async def test_unknown_client(self) -> None:
        repo = AsyncMock()
        repo.get_client.return_value = None
        svc = LedgerApplicationService(repo=repo)

        with pytest.raises(ClientNotFoundError):
            await svc.client_statement(MagicMock(), 10)


class TestListVendorMovements:
    async def test_inverted_range_rejected(self) -> None:
        repo = AsyncMock()
        svc = LedgerApplicationService(repo=repo)

        with pytest.raises(InvalidRangeError):
            await svc.list_vendor_movements(MagicMock(), 2, date(2026, 3, 31), date(2026, 3, 1))
        repo.list_for_vendor_period.assert_not_awaited()

    async def test_queries_all_kinds(self) -> None:
        repo = AsyncMock()
        repo.list_for_vendor_period.return_value = [_make_movement()]
        svc = LedgerApplicationService(repo=repo)

        result = await svc.list_vendor_movements(
            MagicMock(), 2, date(2026, 3, 1), date(2026, 3, 31)
        )

        kinds = repo.list_for_vendor_period.call_args.args[4]
        assert set(kinds) == {k.value for k in MovementKind}
        assert len(result.items) == 1
