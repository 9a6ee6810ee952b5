"""CommissionConfigRepository - concrete implementation of CommissionConfigRepositoryProtocol.

One active row per vendor is enforced by the partial unique index
uq_vcc_vendor_active (vendor_id) WHERE active. An update is
deactivate + insert, so rows are never rewritten or deleted.

Transaction ownership: the CALLER (application service) commits or rolls back.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_commission.domain.models import Vendor, VendorCommissionConfig
from src.crm_common.errors import InternalError

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_GET_VENDOR_SQL = text("""
    SELECT id, name, role, active
    FROM users
    WHERE id = :vendor_id
""")

_CONFIG_COLUMNS = """
    vc.id, vc.vendor_id, u.name AS vendor_name, u.role AS vendor_role,
    vc.percentage, vc.basis, vc.minimum, vc.comment, vc.active,
    vc.effective_from, vc.updated_at
"""

_GET_ACTIVE_CONFIG_SQL = text(f"""
    SELECT {_CONFIG_COLUMNS}
    FROM vendor_commission_configs vc
    JOIN users u ON u.id = vc.vendor_id
    WHERE vc.vendor_id = :vendor_id AND vc.active
""")

_LIST_ACTIVE_CONFIGS_SQL = text(f"""
    SELECT {_CONFIG_COLUMNS}
    FROM vendor_commission_configs vc
    JOIN users u ON u.id = vc.vendor_id
    WHERE vc.active
    ORDER BY u.name
""")

_DEACTIVATE_SQL = text("""
    UPDATE vendor_commission_configs
    SET active = FALSE
    WHERE vendor_id = :vendor_id AND active
""")

_INSERT_CONFIG_SQL = text("""
    INSERT INTO vendor_commission_configs
        (vendor_id, percentage, basis, minimum, comment, active, effective_from)
    VALUES
        (:vendor_id, :percentage, :basis, :minimum, :comment, TRUE, :effective_from)
    RETURNING id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_config(row: object) -> VendorCommissionConfig:
    return VendorCommissionConfig(
        id=row.id,  # type: ignore[attr-defined]
        vendor_id=row.vendor_id,  # type: ignore[attr-defined]
        vendor_name=row.vendor_name,  # type: ignore[attr-defined]
        vendor_role=row.vendor_role,  # type: ignore[attr-defined]
        percentage=Decimal(row.percentage),  # type: ignore[attr-defined]
        basis=row.basis,  # type: ignore[attr-defined]
        minimum=Decimal(row.minimum),  # type: ignore[attr-defined]
        comment=row.comment or "",  # type: ignore[attr-defined]
        active=row.active,  # type: ignore[attr-defined]
        effective_from=row.effective_from,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CommissionConfigRepository:
    async def get_vendor(self, db: AsyncSession, vendor_id: int) -> Vendor | None:
        row = (await db.execute(_GET_VENDOR_SQL, {"vendor_id": vendor_id})).fetchone()
        if row is None:
            return None
        return Vendor(id=row.id, name=row.name, role=row.role, active=row.active)

    async def get_active_config(
        self, db: AsyncSession, vendor_id: int
    ) -> VendorCommissionConfig | None:
        result = await db.execute(_GET_ACTIVE_CONFIG_SQL, {"vendor_id": vendor_id})
        row = result.fetchone()
        return _row_to_config(row) if row else None

    async def list_active_configs(self, db: AsyncSession) -> list[VendorCommissionConfig]:
        result = await db.execute(_LIST_ACTIVE_CONFIGS_SQL)
        return [_row_to_config(row) for row in result.fetchall()]

    async def deactivate_active_config(self, db: AsyncSession, vendor_id: int) -> int:
        result = await db.execute(_DEACTIVATE_SQL, {"vendor_id": vendor_id})
        return result.rowcount

    async def insert_config(
        self,
        db: AsyncSession,
        vendor_id: int,
        percentage: Decimal,
        basis: str,
        minimum: Decimal,
        comment: str,
        effective_from: date,
    ) -> VendorCommissionConfig:
        await db.execute(
            _INSERT_CONFIG_SQL,
            {
                "vendor_id": vendor_id,
                "percentage": percentage,
                "basis": basis,
                "minimum": minimum,
                "comment": comment,
                "effective_from": effective_from,
            },
        )
        config = await self.get_active_config(db, vendor_id)
        if config is None:
            raise InternalError("Config insert is not visible in the same transaction")
        return config
