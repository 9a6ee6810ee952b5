"""Router tests: envelope, error mapping and request validation.

Services are replaced with AsyncMocks and the DB session dependency is
overridden, so no database is needed.
"""

from collections.abc import AsyncGenerator, Iterator
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

import src.crm_adjustment.api.router as adjustment_api
import src.crm_liquidation.api.router as liquidation_api
from src.crm_adjustment.application.schemas import AdjustmentSummaryResponse
from src.crm_adjustment.domain.models import AdjustmentSummary
from src.crm_common.database import get_db_session
from src.crm_common.errors import (
    InvalidAmountError,
    LiquidationAlreadyExistsError,
    LiquidationNotFoundError,
)
from src.main import app


async def _fake_session() -> AsyncGenerator[MagicMock, None]:
    yield MagicMock()


@pytest.fixture(autouse=True)
def _override_db() -> Iterator[None]:
    app.dependency_overrides[get_db_session] = _fake_session
    yield
    app.dependency_overrides.clear()


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"


class TestEnvelope:
    async def test_suggested_periods(self, client: AsyncClient) -> None:
        resp = await client.get("/api/v1/reports/suggested-periods")

        assert resp.status_code == 200
        body = resp.json()
        assert body["code"] == 0
        assert len(body["data"]["items"]) == 4
        assert body["request_id"] == resp.headers["X-Request-ID"]

    async def test_adjustment_summary(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        summary = AdjustmentSummaryResponse.from_domain(
            2, AdjustmentSummary(Decimal("300"), Decimal("120"))
        )
        monkeypatch.setattr(
            adjustment_api._service, "adjustment_summary", AsyncMock(return_value=summary)
        )

        resp = await client.get("/api/v1/adjustments/summary/2")

        assert resp.status_code == 200
        assert resp.json()["data"]["total_display"] == "$420.00"


class TestErrorMapping:
    async def test_invalid_amount_is_422_with_code(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            liquidation_api._service,
            "settle",
            AsyncMock(side_effect=InvalidAmountError("advances", Decimal("-1"))),
        )

        resp = await client.post(
            "/api/v1/liquidations",
            json={"vendor_id": 2, "date_from": "2026-03-01", "date_to": "2026-03-31",
                  "advances": "-1"},
        )

        assert resp.status_code == 422
        body = resp.json()
        assert body["code"] == 3001
        assert body["data"] is None

    async def test_not_found_is_404(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            liquidation_api._service,
            "get_liquidation",
            AsyncMock(side_effect=LiquidationNotFoundError(9)),
        )

        resp = await client.get("/api/v1/liquidations/9")

        assert resp.status_code == 404
        assert resp.json()["code"] == 4001

    async def test_sub_cent_advance_rejected_by_schema(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        register = AsyncMock()
        monkeypatch.setattr(adjustment_api._service, "register_advance", register)

        resp = await client.post(
            "/api/v1/adjustments/advances",
            json={"vendor_id": 2, "entry_date": "2026-03-12", "amount": "0.001"},
        )

        assert resp.status_code == 422
        register.assert_not_awaited()

    async def test_sub_cent_settle_adjustment_rejected_by_schema(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settle = AsyncMock()
        monkeypatch.setattr(liquidation_api._service, "settle", settle)

        resp = await client.post(
            "/api/v1/liquidations",
            json={"vendor_id": 2, "date_from": "2026-03-01", "date_to": "2026-03-31",
                  "advances": "10.005"},
        )

        assert resp.status_code == 422
        settle.assert_not_awaited()

    async def test_duplicate_period_is_409(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setattr(
            liquidation_api._service,
            "settle",
            AsyncMock(side_effect=LiquidationAlreadyExistsError(2, 7)),
        )

        resp = await client.post(
            "/api/v1/liquidations",
            json={"vendor_id": 2, "date_from": "2026-03-01", "date_to": "2026-03-31"},
        )

        assert resp.status_code == 409
        assert resp.json()["code"] == 4004

    async def test_request_validation(self, client: AsyncClient) -> None:
        resp = await client.post("/api/v1/liquidations", json={"date_from": "2026-03-01"})
        assert resp.status_code == 422

    async def test_settle_passes_adjustments(
        self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        settle = AsyncMock(side_effect=LiquidationNotFoundError(0))
        monkeypatch.setattr(liquidation_api._service, "settle", settle)

        await client.post(
            "/api/v1/liquidations",
            json={"vendor_id": 2, "date_from": "2026-03-01", "date_to": "2026-03-31",
                  "advances": "150.50", "payment_method": "efectivo"},
        )

        adjustments = settle.call_args.args[4]
        assert adjustments.advances == Decimal("150.50")
        assert adjustments.payment_method == "efectivo"
        assert adjustments.cash_in_hand == 0
