"""Repository Protocol - dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from datetime import date
from decimal import Decimal
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_ledger.domain.models import Client, Movement


class MovementRepositoryProtocol(Protocol):
    async def get_client(self, db: AsyncSession, client_id: int) -> Client | None: ...

    async def get_client_balance(self, db: AsyncSession, client_id: int) -> Decimal: ...

    async def insert_movement(
        self,
        db: AsyncSession,
        movement_date: date,
        client_id: int,
        vendor_id: int,
        kind: str,
        amount: Decimal,
        document: str | None,
        note: str | None,
    ) -> Movement: ...

    async def list_for_vendor_period(
        self,
        db: AsyncSession,
        vendor_id: int,
        date_from: date,
        date_to: date,
        kinds: list[str],
    ) -> list[Movement]: ...

    async def list_for_client(self, db: AsyncSession, client_id: int) -> list[Movement]: ...
