"""Integration-test fixtures.

All integration tests share a single event loop so that the module-level
SQLAlchemy async engine pool (created at import time) remains valid across
the whole session.

Pre-condition: a PostgreSQL reachable at DATABASE_URL, migrated with
`alembic upgrade head` (the seed revision creates the demo users).
"""

import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.crm_common.database import async_session_factory
from src.main import app


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client - keeps the engine pool alive."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _create_vendor_and_client() -> tuple[int, int]:
    uid = uuid.uuid4().hex[:8]
    async with async_session_factory() as db:
        vendor_id = (
            await db.execute(
                text(
                    "INSERT INTO users (name, email, role)"
                    " VALUES (:name, :email, 'vendedor') RETURNING id"
                ),
                {"name": f"Vendedor {uid}", "email": f"v_{uid}@example.com"},
            )
        ).scalar_one()
        client_id = (
            await db.execute(
                text(
                    "INSERT INTO clients (legal_name, vendor_id)"
                    " VALUES (:name, :vendor_id) RETURNING id"
                ),
                {"name": f"Cliente {uid}", "vendor_id": vendor_id},
            )
        ).scalar_one()
        await db.commit()
    return vendor_id, client_id


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def vendor_and_client() -> tuple[int, int]:
    """A fresh sales vendor with one client, so runs never share state."""
    return await _create_vendor_and_client()


@pytest_asyncio.fixture(loop_scope="session")
async def fresh_vendor_and_client() -> tuple[int, int]:
    """Like vendor_and_client, but new for every test."""
    return await _create_vendor_and_client()
