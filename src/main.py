"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.crm_adjustment.api.router import router as adjustment_router
from src.crm_commission.api.router import router as commission_router
from src.crm_common.database import engine
from src.crm_common.errors import AppError
from src.crm_common.response import error_response
from src.crm_gateway.middleware.request_log import RequestLogMiddleware
from src.crm_ledger.api.router import router as ledger_router
from src.crm_liquidation.api.router import router as liquidation_router
from src.crm_reporting.api.router import router as reporting_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify the DB connection. Shutdown: dispose the pool."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("%s started", settings.APP_NAME)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)


app.add_middleware(RequestLogMiddleware)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    resp = error_response(exc.code, exc.message, getattr(request.state, "request_id", None))
    if exc.http_status >= 500:
        logger.error(
            "%s %s failed: [%d] %s", request.method, request.url.path, exc.code, exc.message
        )
    return JSONResponse(
        status_code=exc.http_status,
        content=resp.model_dump(),
    )


app.include_router(ledger_router, prefix="/api/v1")
app.include_router(commission_router, prefix="/api/v1")
app.include_router(adjustment_router, prefix="/api/v1")
app.include_router(liquidation_router, prefix="/api/v1")
app.include_router(reporting_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
