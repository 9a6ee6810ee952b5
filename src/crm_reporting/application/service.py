"""ReportingApplicationService - read-only aggregation views."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.datetime_utils import today
from src.crm_reporting.application.schemas import (
    DashboardSummaryResponse,
    DashboardTotalsOut,
    SuggestedPeriodOut,
    SuggestedPeriodsResponse,
    VendorBreakdownOut,
    VendorYearStatsResponse,
)
from src.crm_reporting.domain.periods import suggested_periods
from src.crm_reporting.domain.repository import ReportRepositoryProtocol
from src.crm_reporting.infrastructure.persistence import ReportRepository


class ReportingApplicationService:
    def __init__(self, repo: ReportRepositoryProtocol | None = None) -> None:
        self._repo: ReportRepositoryProtocol = repo or ReportRepository()

    async def vendor_year_stats(
        self, db: AsyncSession, vendor_id: int, year: int
    ) -> VendorYearStatsResponse:
        stats = await self._repo.vendor_year_stats(db, vendor_id, year)
        return VendorYearStatsResponse.from_domain(stats)

    async def dashboard_summary(
        self, db: AsyncSession, day: date | None = None
    ) -> DashboardSummaryResponse:
        """Totals for the calendar year of `day` (default: today)."""
        year = (day or today()).year
        totals = await self._repo.dashboard_totals(db, year)
        breakdown = await self._repo.vendor_breakdown(db, year)
        return DashboardSummaryResponse(
            year=year,
            totals=DashboardTotalsOut.from_domain(totals),
            by_vendor=[VendorBreakdownOut.from_domain(b) for b in breakdown],
        )

    def suggested_periods(self, day: date | None = None) -> SuggestedPeriodsResponse:
        periods = suggested_periods(day or today())
        return SuggestedPeriodsResponse(items=[SuggestedPeriodOut.from_domain(p) for p in periods])
