"""CommissionApplicationService - vendor commission configs and the calculator.

Config writes (update, onboard) commit their own transaction. calculate() is a
pure read: it loads the active config and the vendor's movements and hands
them to the domain calculator.
"""

import logging
from datetime import date
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.crm_commission.application.schemas import (
    CalculationResponse,
    ConfigListResponse,
    ConfigResponse,
)
from src.crm_commission.domain.calculator import calculate_commission, eligible_kinds
from src.crm_commission.domain.models import CommissionCalculation
from src.crm_commission.domain.repository import CommissionConfigRepositoryProtocol
from src.crm_commission.infrastructure.persistence import CommissionConfigRepository
from src.crm_common.datetime_utils import today
from src.crm_common.enums import CommissionBasis, UserRole
from src.crm_common.errors import (
    CommissionNotConfiguredError,
    InvalidCommissionConfigError,
    InvalidRangeError,
    VendorNotFoundError,
)
from src.crm_common.money import ZERO, validate_percentage
from src.crm_ledger.domain.repository import MovementRepositoryProtocol
from src.crm_ledger.infrastructure.persistence import MovementRepository

logger = logging.getLogger(__name__)

_ADMIN_DEFAULT_COMMENT = "Administrador - Sin comisión"
_SALES_DEFAULT_COMMENT = "Vendedor - {pct}% sobre pagos recibidos"


class CommissionApplicationService:
    def __init__(
        self,
        repo: CommissionConfigRepositoryProtocol | None = None,
        movements: MovementRepositoryProtocol | None = None,
    ) -> None:
        self._repo: CommissionConfigRepositoryProtocol = repo or CommissionConfigRepository()
        self._movements: MovementRepositoryProtocol = movements or MovementRepository()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    async def get_config(self, db: AsyncSession, vendor_id: int) -> ConfigResponse:
        config = await self._repo.get_active_config(db, vendor_id)
        if config is None:
            raise CommissionNotConfiguredError(vendor_id)
        return ConfigResponse.from_domain(config)

    async def list_configs(self, db: AsyncSession) -> ConfigListResponse:
        configs = await self._repo.list_active_configs(db)
        return ConfigListResponse(items=[ConfigResponse.from_domain(c) for c in configs])

    async def update_config(
        self,
        db: AsyncSession,
        vendor_id: int,
        percentage: Decimal,
        basis: str,
        minimum: Decimal = ZERO,
        comment: str = "",
    ) -> ConfigResponse:
        try:
            validate_percentage(percentage)
        except ValueError as e:
            raise InvalidCommissionConfigError(str(e)) from None
        try:
            basis_value = CommissionBasis(basis).value
        except ValueError:
            raise InvalidCommissionConfigError(f"unknown basis {basis!r}") from None
        if minimum < ZERO:
            raise InvalidCommissionConfigError(f"minimum must be >= 0, got {minimum}")

        try:
            vendor = await self._repo.get_vendor(db, vendor_id)
            if vendor is None:
                raise VendorNotFoundError(vendor_id)
            await self._repo.deactivate_active_config(db, vendor_id)
            config = await self._repo.insert_config(
                db, vendor_id, percentage, basis_value, minimum, comment, today()
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Commission config updated: vendor=%s pct=%s basis=%s minimum=%s",
            vendor_id, percentage, basis_value, minimum,
        )
        return ConfigResponse.from_domain(config)

    async def onboard_vendor(self, db: AsyncSession, vendor_id: int) -> ConfigResponse:
        """Create the default config for a vendor that has none.

        Admin accounts get 0 %, sales accounts the configured default on payments.
        A vendor that already has an active config is returned unchanged.
        """
        try:
            vendor = await self._repo.get_vendor(db, vendor_id)
            if vendor is None:
                raise VendorNotFoundError(vendor_id)
            existing = await self._repo.get_active_config(db, vendor_id)
            if existing is not None:
                await db.rollback()
                return ConfigResponse.from_domain(existing)

            if vendor.role == UserRole.ADMIN.value:
                pct, comment = ZERO, _ADMIN_DEFAULT_COMMENT
            else:
                pct = settings.DEFAULT_SALES_COMMISSION_PCT
                comment = _SALES_DEFAULT_COMMENT.format(pct=pct.normalize())
            config = await self._repo.insert_config(
                db, vendor_id, pct, CommissionBasis.ON_PAYMENTS.value, ZERO, comment, today()
            )
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info("Vendor %s onboarded with %s%% commission", vendor_id, pct)
        return ConfigResponse.from_domain(config)

    # ------------------------------------------------------------------
    # Calculation
    # ------------------------------------------------------------------

    async def calculate(
        self, db: AsyncSession, vendor_id: int, date_from: date, date_to: date
    ) -> CommissionCalculation:
        if date_from > date_to:
            raise InvalidRangeError(date_from, date_to)
        config = await self._repo.get_active_config(db, vendor_id)
        if config is None:
            raise CommissionNotConfiguredError(vendor_id)

        movements = await self._movements.list_for_vendor_period(
            db, vendor_id, date_from, date_to, sorted(eligible_kinds(config.basis))
        )
        calc = calculate_commission(config, movements, date_from, date_to)
        logger.debug(
            "Commission for vendor %s %s..%s: base=%s commission=%s (%d movements)",
            vendor_id, date_from, date_to, calc.total_base, calc.total_commission,
            calc.movement_count,
        )
        return calc

    async def preview(
        self, db: AsyncSession, vendor_id: int, date_from: date, date_to: date
    ) -> CalculationResponse:
        calc = await self.calculate(db, vendor_id, date_from, date_to)
        return CalculationResponse.from_domain(calc)
