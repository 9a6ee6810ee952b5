"""Repository Protocol - dependency inversion for testability."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_reporting.domain.models import DashboardTotals, VendorBreakdown, VendorYearStats


class ReportRepositoryProtocol(Protocol):
    async def vendor_year_stats(
        self, db: AsyncSession, vendor_id: int, year: int
    ) -> VendorYearStats: ...

    async def dashboard_totals(self, db: AsyncSession, year: int) -> DashboardTotals: ...

    async def vendor_breakdown(self, db: AsyncSession, year: int) -> list[VendorBreakdown]: ...
