"""Unit tests for AdjustmentApplicationService using mock repositories."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.crm_adjustment.application.service import AdjustmentApplicationService
from src.crm_adjustment.domain.models import (
    AdjustmentSummary,
    AdvanceEntry,
    CashInHandEntry,
)
from src.crm_common.errors import (
    AdjustmentEntryNotFoundError,
    AdjustmentEntryNotPendingError,
    ClientNotFoundError,
    InvalidAmountError,
    VendorNotFoundError,
)
from src.crm_ledger.domain.models import Client


def _advance(entry_id: int = 1, amount: str = "300", state: str = "pendiente") -> AdvanceEntry:
    return AdvanceEntry(
        id=entry_id,
        vendor_id=2,
        entry_date=date(2026, 3, 4),
        amount=Decimal(amount),
        reason="adelanto quincena",
        state=state,
    )


def _cash(entry_id: int = 1, amount: str = "120", state: str = "pendiente") -> CashInHandEntry:
    return CashInHandEntry(
        id=entry_id,
        vendor_id=2,
        entry_date=date(2026, 3, 6),
        client_id=10,
        amount=Decimal(amount),
        concept="cobro en efectivo",
        state=state,
        client_name="Ferretería Sur",
    )


def _make_service() -> tuple[AdjustmentApplicationService, AsyncMock, AsyncMock]:
    repo = AsyncMock()
    repo.vendor_exists.return_value = True
    clients = AsyncMock()
    clients.get_client.return_value = Client(id=10, legal_name="Ferretería Sur", vendor_id=2)
    return AdjustmentApplicationService(repo=repo, clients=clients), repo, clients


class TestRegisterAdvance:
    async def test_registers_pending_entry(self) -> None:
        svc, repo, _ = _make_service()
        repo.insert_advance.return_value = _advance()
        db = AsyncMock()

        result = await svc.register_advance(
            db, 2, date(2026, 3, 4), Decimal("300"), "adelanto quincena"
        )

        repo.insert_advance.assert_awaited_once_with(
            db, 2, date(2026, 3, 4), Decimal("300"), "adelanto quincena"
        )
        db.commit.assert_awaited_once()
        assert result.state == "pendiente"
        assert result.amount_display == "$300.00"

    @pytest.mark.parametrize(
        "amount", [Decimal("-100"), Decimal("0"), Decimal("0.001"), Decimal("10.005")]
    )
    async def test_invalid_amount_creates_nothing(self, amount: Decimal) -> None:
        svc, repo, _ = _make_service()
        db = AsyncMock()

        with pytest.raises(InvalidAmountError):
            await svc.register_advance(db, 2, date(2026, 3, 4), amount, "x")

        repo.insert_advance.assert_not_awaited()
        repo.vendor_exists.assert_not_awaited()
        db.commit.assert_not_awaited()

    async def test_unknown_vendor(self) -> None:
        svc, repo, _ = _make_service()
        repo.vendor_exists.return_value = False
        db = AsyncMock()

        with pytest.raises(VendorNotFoundError):
            await svc.register_advance(db, 99, date(2026, 3, 4), Decimal("10"))
        db.rollback.assert_awaited_once()


class TestRegisterCashInHand:
    async def test_registers_entry(self) -> None:
        svc, repo, _ = _make_service()
        repo.insert_cash_in_hand.return_value = _cash()
        db = AsyncMock()

        result = await svc.register_cash_in_hand(
            db, 2, date(2026, 3, 6), 10, Decimal("120"), "cobro en efectivo"
        )

        assert result.client_name == "Ferretería Sur"
        db.commit.assert_awaited_once()

    async def test_client_must_exist(self) -> None:
        svc, repo, clients = _make_service()
        clients.get_client.return_value = None
        db = AsyncMock()

        with pytest.raises(ClientNotFoundError):
            await svc.register_cash_in_hand(db, 2, date(2026, 3, 6), 77, Decimal("5"))
        repo.insert_cash_in_hand.assert_not_awaited()
        db.rollback.assert_awaited_once()

    async def test_negative_amount(self) -> None:
        svc, repo, _ = _make_service()
        with pytest.raises(InvalidAmountError):
            await svc.register_cash_in_hand(AsyncMock(), 2, date(2026, 3, 6), 10, Decimal("-1"))
        repo.insert_cash_in_hand.assert_not_awaited()

    async def test_sub_cent_amount(self) -> None:
        svc, repo, clients = _make_service()
        with pytest.raises(InvalidAmountError):
            await svc.register_cash_in_hand(
                AsyncMock(), 2, date(2026, 3, 6), 10, Decimal("10.005")
            )
        clients.get_client.assert_not_awaited()
        repo.insert_cash_in_hand.assert_not_awaited()

    async def test_two_decimal_amount_accepted(self) -> None:
        svc, repo, _ = _make_service()
        repo.insert_cash_in_hand.return_value = _cash(amount="10.50")
        db = AsyncMock()

        await svc.register_cash_in_hand(db, 2, date(2026, 3, 6), 10, Decimal("10.50"))

        assert repo.insert_cash_in_hand.call_args.args[4] == Decimal("10.50")
        db.commit.assert_awaited_once()


class TestQueries:
    async def test_pending_advances(self) -> None:
        svc, repo, _ = _make_service()
        repo.list_pending_advances.return_value = [_advance(2), _advance(1)]

        result = await svc.pending_advances(MagicMock(), 2)

        assert [i.id for i in result.items] == [2, 1]

    async def test_summary_totals(self) -> None:
        svc, repo, _ = _make_service()
        repo.get_summary.return_value = AdjustmentSummary(
            advances_pending=Decimal("300"), cash_in_hand_pending=Decimal("120.5")
        )

        result = await svc.adjustment_summary(MagicMock(), 2)

        assert result.advances_pending == Decimal("300.00")
        assert result.cash_in_hand_pending == Decimal("120.50")
        assert result.total == Decimal("420.50")
        assert result.total_display == "$420.50"

    async def test_summary_empty(self) -> None:
        svc, repo, _ = _make_service()
        repo.get_summary.return_value = AdjustmentSummary(Decimal("0"), Decimal("0"))

        result = await svc.adjustment_summary(MagicMock(), 2)

        assert result.total == Decimal("0.00")


class TestCancel:
    async def test_cancel_pending_advance(self) -> None:
        svc, repo, _ = _make_service()
        repo.cancel_advance.return_value = _advance(state="cancelado")
        db = AsyncMock()

        result = await svc.cancel_advance(db, 1)

        assert result.state == "cancelado"
        db.commit.assert_awaited_once()

    async def test_cancel_missing_advance(self) -> None:
        svc, repo, _ = _make_service()
        repo.cancel_advance.return_value = None
        repo.get_advance.return_value = None
        db = AsyncMock()

        with pytest.raises(AdjustmentEntryNotFoundError):
            await svc.cancel_advance(db, 5)
        db.rollback.assert_awaited_once()

    async def test_cancel_applied_advance_rejected(self) -> None:
        svc, repo, _ = _make_service()
        repo.cancel_advance.return_value = None
        repo.get_advance.return_value = _advance(state="aplicado")
        db = AsyncMock()

        with pytest.raises(AdjustmentEntryNotPendingError):
            await svc.cancel_advance(db, 1)
        db.commit.assert_not_awaited()

    async def test_cancel_cancelled_cash_rejected(self) -> None:
        svc, repo, _ = _make_service()
        repo.cancel_cash_in_hand.return_value = None
        repo.get_cash_in_hand.return_value = _cash(state="cancelado")

        with pytest.raises(AdjustmentEntryNotPendingError):
            await svc.cancel_cash_in_hand(AsyncMock(), 1)
