"""crm_liquidation REST endpoints.

POST /liquidations                        - calculate and settle a period
GET  /liquidations                        - recent liquidations, optionally per vendor
GET  /liquidations/{id}                   - record + detail lines + applied entries
PUT  /liquidations/{id}/pay               - calculada -> pagada (admin signs)
PUT  /liquidations/{id}/vendor-signature  - vendor signs
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.database import get_db_session
from src.crm_common.response import ApiResponse, success_response
from src.crm_liquidation.application.schemas import MarkPaidRequest, SettleRequest
from src.crm_liquidation.application.service import LiquidationApplicationService
from src.crm_liquidation.domain.models import SettlementAdjustments

router = APIRouter(prefix="/liquidations", tags=["liquidations"])

_service = LiquidationApplicationService()


@router.post("")
async def settle_liquidation(
    body: SettleRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    adjustments = SettlementAdjustments(
        advances=body.advances,
        cash_in_hand=body.cash_in_hand,
        other_discounts=body.other_discounts,
        other_bonuses=body.other_bonuses,
        payment_method=body.payment_method,
        payment_reference=body.payment_reference,
        notes=body.notes,
        delivery_date=body.delivery_date,
    )
    data = await _service.settle(db, body.vendor_id, body.date_from, body.date_to, adjustments)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("")
async def list_liquidations(
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    vendor_id: int | None = Query(None, gt=0),
    limit: int | None = Query(None, ge=1, le=200),
) -> ApiResponse:
    data = await _service.list_liquidations(db, vendor_id, limit)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/{liquidation_id}")
async def get_liquidation(
    liquidation_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.get_liquidation(db, liquidation_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{liquidation_id}/pay")
async def mark_paid(
    liquidation_id: int,
    body: MarkPaidRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.mark_paid(db, liquidation_id, body.payment_date, body.notes)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.put("/{liquidation_id}/vendor-signature")
async def mark_vendor_signed(
    liquidation_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.mark_vendor_signed(db, liquidation_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
