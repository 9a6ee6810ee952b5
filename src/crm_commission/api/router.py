"""crm_commission REST endpoints.

GET  /commissions/configs                      - all active configs
GET  /commissions/configs/{vendor_id}          - active config of one vendor
PUT  /commissions/configs/{vendor_id}          - replace the active config
POST /commissions/configs/{vendor_id}/onboard  - create the role default config
POST /commissions/calculate                    - preview a period (no writes)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_commission.application.schemas import PeriodRequest, UpdateConfigRequest
from src.crm_commission.application.service import CommissionApplicationService
from src.crm_common.database import get_db_session
from src.crm_common.response import ApiResponse, success_response

router = APIRouter(prefix="/commissions", tags=["commissions"])

_service = CommissionApplicationService()


@router.get("/configs")
async def list_configs(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.list_configs(db)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/configs/{vendor_id}")
async def get_config(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_config(db, vendor_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/configs/{vendor_id}")
async def update_config(
    vendor_id: int,
    body: UpdateConfigRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.update_config(
        db, vendor_id, body.percentage, body.basis.value, body.minimum, body.comment
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/configs/{vendor_id}/onboard")
async def onboard_vendor(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.onboard_vendor(db, vendor_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.post("/calculate")
async def calculate(
    body: PeriodRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.preview(db, body.vendor_id, body.date_from, body.date_to)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
