"""crm_reporting REST endpoints.

GET /reports/vendors/{vendor_id}/years/{year} - yearly stats for one vendor
GET /reports/summary                          - current-year dashboard
GET /reports/suggested-periods                - common liquidation periods
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.database import get_db_session
from src.crm_common.response import ApiResponse, success_response
from src.crm_reporting.application.service import ReportingApplicationService

router = APIRouter(prefix="/reports", tags=["reports"])

_service = ReportingApplicationService()


@router.get("/vendors/{vendor_id}/years/{year}")
async def vendor_year_stats(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    year: int = Path(..., ge=2000, le=2100),
) -> ApiResponse:
    data = await _service.vendor_year_stats(db, vendor_id, year)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/summary")
async def dashboard_summary(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.dashboard_summary(db)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/suggested-periods")
async def suggested_periods(request: Request) -> ApiResponse:
    data = _service.suggested_periods()
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
