"""Unit tests for crm_reporting: periods, service and query wiring."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from src.crm_reporting.application.service import ReportingApplicationService
from src.crm_reporting.domain.models import DashboardTotals, VendorBreakdown, VendorYearStats
from src.crm_reporting.domain.periods import suggested_periods
from src.crm_reporting.infrastructure.persistence import ReportRepository


class TestSuggestedPeriods:
    def test_mid_month(self) -> None:
        periods = {p.name: (p.date_from, p.date_to) for p in suggested_periods(date(2026, 3, 15))}

        assert periods["current_month"] == (date(2026, 3, 1), date(2026, 3, 31))
        assert periods["previous_month"] == (date(2026, 2, 1), date(2026, 2, 28))
        assert periods["last_30_days"] == (date(2026, 2, 13), date(2026, 3, 15))
        assert periods["year_to_date"] == (date(2026, 1, 1), date(2026, 3, 15))

    def test_january_previous_month_is_december(self) -> None:
        periods = {p.name: (p.date_from, p.date_to) for p in suggested_periods(date(2026, 1, 10))}

        assert periods["previous_month"] == (date(2025, 12, 1), date(2025, 12, 31))
        assert periods["current_month"] == (date(2026, 1, 1), date(2026, 1, 31))

    def test_leap_february(self) -> None:
        periods = {p.name: (p.date_from, p.date_to) for p in suggested_periods(date(2028, 2, 29))}
        assert periods["current_month"] == (date(2028, 2, 1), date(2028, 2, 29))

    def test_order(self) -> None:
        names = [p.name for p in suggested_periods(date(2026, 6, 1))]
        assert names == ["current_month", "previous_month", "last_30_days", "year_to_date"]


class TestReportingService:
    async def test_vendor_year_stats(self) -> None:
        repo = AsyncMock()
        repo.vendor_year_stats.return_value = VendorYearStats(
            vendor_id=2,
            year=2026,
            liquidation_count=3,
            total_base=Decimal("90000"),
            total_commission=Decimal("13500"),
            total_net=Decimal("12000"),
            total_advances=Decimal("1500"),
            total_cash_in_hand=Decimal("0"),
            average_commission=Decimal("4500.3333333"),
            total_movements=12,
            total_clients=5,
        )
        svc = ReportingApplicationService(repo=repo)

        result = await svc.vendor_year_stats(MagicMock(), 2, 2026)

        assert result.average_commission == Decimal("4500.33")
        assert result.total_net_display == "$12,000.00"

    async def test_dashboard_uses_year_of_day(self) -> None:
        repo = AsyncMock()
        repo.dashboard_totals.return_value = DashboardTotals(
            active_vendors=2,
            liquidation_count=4,
            total_commission=Decimal("9000"),
            total_net=Decimal("7000"),
            net_paid=Decimal("5000"),
            net_pending=Decimal("2000"),
            total_advances=Decimal("2000"),
            total_cash_in_hand=Decimal("0"),
        )
        repo.vendor_breakdown.return_value = [
            VendorBreakdown(2, "Lucía", 3, Decimal("6000"), Decimal("5000"), Decimal("5000")),
            VendorBreakdown(3, "Martín", 1, Decimal("3000"), Decimal("2000"), Decimal("0")),
        ]
        svc = ReportingApplicationService(repo=repo)
        db = MagicMock()

        result = await svc.dashboard_summary(db, date(2026, 10, 19))

        repo.dashboard_totals.assert_awaited_once_with(db, 2026)
        repo.vendor_breakdown.assert_awaited_once_with(db, 2026)
        assert result.year == 2026
        assert result.totals.net_paid + result.totals.net_pending == result.totals.total_net
        assert [v.vendor_name for v in result.by_vendor] == ["Lucía", "Martín"]

    def test_suggested_periods_response(self) -> None:
        svc = ReportingApplicationService(repo=AsyncMock())
        result = svc.suggested_periods(date(2026, 3, 15))
        assert result.items[0].date_from == "2026-03-01"


class TestReportQueries:
    async def test_year_stats_excludes_annulled(self) -> None:
        db = AsyncMock()
        result = MagicMock()
        result.fetchone.return_value = SimpleNamespace(
            liquidation_count=0,
            total_base=0,
            total_commission=0,
            total_net=0,
            total_advances=0,
            total_cash_in_hand=0,
            average_commission=0,
            total_movements=0,
            total_clients=0,
        )
        db.execute.return_value = result

        stats = await ReportRepository().vendor_year_stats(db, 2, 2026)

        sql, params = db.execute.call_args.args
        assert params == {"vendor_id": 2, "year": 2026}
        assert "state <> 'anulada'" in str(sql)
        assert stats.liquidation_count == 0
        assert stats.total_net == Decimal("0")

    async def test_dashboard_queries_exclude_annulled(self) -> None:
        db = AsyncMock()
        totals = MagicMock()
        totals.fetchone.return_value = SimpleNamespace(
            active_vendors=0,
            liquidation_count=0,
            total_commission=0,
            total_net=0,
            net_paid=0,
            net_pending=0,
            total_advances=0,
            total_cash_in_hand=0,
        )
        breakdown = MagicMock()
        breakdown.fetchall.return_value = []
        db.execute.side_effect = [totals, breakdown]
        repo = ReportRepository()

        await repo.dashboard_totals(db, 2026)
        assert await repo.vendor_breakdown(db, 2026) == []

        for call in db.execute.call_args_list:
            assert "state <> 'anulada'" in str(call.args[0])
