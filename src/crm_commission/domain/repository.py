"""Repository Protocol - dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_commission.domain.models import Vendor, VendorCommissionConfig


class CommissionConfigRepositoryProtocol(Protocol):
    async def get_vendor(self, db: AsyncSession, vendor_id: int) -> Vendor | None: ...

    async def get_active_config(
        self, db: AsyncSession, vendor_id: int
    ) -> VendorCommissionConfig | None: ...

    async def list_active_configs(self, db: AsyncSession) -> list[VendorCommissionConfig]: ...

    async def deactivate_active_config(self, db: AsyncSession, vendor_id: int) -> int: ...

    async def insert_config(
        self,
        db: AsyncSession,
        vendor_id: int,
        percentage: Decimal,
        basis: str,
        minimum: Decimal,
        comment: str,
        effective_from: date,
    ) -> VendorCommissionConfig: ...
