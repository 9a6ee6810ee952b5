"""ReportRepository - aggregate queries over liquidations.

Every query filters by the year of period_to and excludes state 'anulada'.
"""

from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.errors import InternalError
from src.crm_reporting.domain.models import DashboardTotals, VendorBreakdown, VendorYearStats

_VENDOR_YEAR_SQL = text("""
    SELECT COUNT(*)                                AS liquidation_count,
           COALESCE(SUM(total_base), 0)            AS total_base,
           COALESCE(SUM(total_commission), 0)      AS total_commission,
           COALESCE(SUM(total_net), 0)             AS total_net,
           COALESCE(SUM(advances_applied), 0)      AS total_advances,
           COALESCE(SUM(cash_in_hand_applied), 0)  AS total_cash_in_hand,
           COALESCE(AVG(total_commission), 0)      AS average_commission,
           COALESCE(SUM(movement_count), 0)        AS total_movements,
           COALESCE(SUM(client_count), 0)          AS total_clients
    FROM liquidations
    WHERE vendor_id = :vendor_id
      AND EXTRACT(YEAR FROM period_to)::int = :year
      AND state <> 'anulada'
""")

_DASHBOARD_SQL = text("""
    SELECT COUNT(DISTINCT vendor_id)                                          AS active_vendors,
           COUNT(*)                                                           AS liquidation_count,
           COALESCE(SUM(total_commission), 0)                                 AS total_commission,
           COALESCE(SUM(total_net), 0)                                        AS total_net,
           COALESCE(SUM(CASE WHEN state = 'pagada' THEN total_net END), 0)    AS net_paid,
           COALESCE(SUM(CASE WHEN state = 'calculada' THEN total_net END), 0) AS net_pending,
           COALESCE(SUM(advances_applied), 0)                                 AS total_advances,
           COALESCE(SUM(cash_in_hand_applied), 0)                             AS total_cash_in_hand
    FROM liquidations
    WHERE EXTRACT(YEAR FROM period_to)::int = :year
      AND state <> 'anulada'
""")

_BREAKDOWN_SQL = text("""
    SELECT l.vendor_id,
           u.name                                                               AS vendor_name,
           COUNT(*)                                                             AS liquidation_count,
           COALESCE(SUM(l.total_commission), 0)                                 AS total_commission,
           COALESCE(SUM(l.total_net), 0)                                        AS total_net,
           COALESCE(SUM(CASE WHEN l.state = 'pagada' THEN l.total_net END), 0)  AS net_paid
    FROM liquidations l
    JOIN users u ON u.id = l.vendor_id
    WHERE EXTRACT(YEAR FROM l.period_to)::int = :year
      AND l.state <> 'anulada'
    GROUP BY l.vendor_id, u.name
    ORDER BY total_net DESC, l.vendor_id
""")


class ReportRepository:
    async def vendor_year_stats(
        self, db: AsyncSession, vendor_id: int, year: int
    ) -> VendorYearStats:
        row = (
            await db.execute(_VENDOR_YEAR_SQL, {"vendor_id": vendor_id, "year": year})
        ).fetchone()
        if row is None:
            raise InternalError("Vendor year stats returned no rows")
        return VendorYearStats(
            vendor_id=vendor_id,
            year=year,
            liquidation_count=row.liquidation_count,
            total_base=Decimal(row.total_base),
            total_commission=Decimal(row.total_commission),
            total_net=Decimal(row.total_net),
            total_advances=Decimal(row.total_advances),
            total_cash_in_hand=Decimal(row.total_cash_in_hand),
            average_commission=Decimal(row.average_commission),
            total_movements=int(row.total_movements),
            total_clients=int(row.total_clients),
        )

    async def dashboard_totals(self, db: AsyncSession, year: int) -> DashboardTotals:
        row = (await db.execute(_DASHBOARD_SQL, {"year": year})).fetchone()
        if row is None:
            raise InternalError("Dashboard totals returned no rows")
        return DashboardTotals(
            active_vendors=row.active_vendors,
            liquidation_count=row.liquidation_count,
            total_commission=Decimal(row.total_commission),
            total_net=Decimal(row.total_net),
            net_paid=Decimal(row.net_paid),
            net_pending=Decimal(row.net_pending),
            total_advances=Decimal(row.total_advances),
            total_cash_in_hand=Decimal(row.total_cash_in_hand),
        )

    async def vendor_breakdown(self, db: AsyncSession, year: int) -> list[VendorBreakdown]:
        result = await db.execute(_BREAKDOWN_SQL, {"year": year})
        return [
            VendorBreakdown(
                vendor_id=row.vendor_id,
                vendor_name=row.vendor_name,
                liquidation_count=row.liquidation_count,
                total_commission=Decimal(row.total_commission),
                total_net=Decimal(row.total_net),
                net_paid=Decimal(row.net_paid),
            )
            for row in result.fetchall()
        ]
