"""crm_adjustment REST endpoints.

POST /adjustments/advances                   - register an advance paid to a vendor
GET  /adjustments/advances/{vendor_id}       - pending advances, newest first
POST /adjustments/advances/{id}/cancel       - cancel a pending advance
POST /adjustments/cash-in-hand               - register cash a vendor still holds
GET  /adjustments/cash-in-hand/{vendor_id}   - pending cash-in-hand, newest first
POST /adjustments/cash-in-hand/{id}/cancel   - cancel a pending cash-in-hand entry
GET  /adjustments/summary/{vendor_id}        - pending totals per ledger
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_adjustment.application.schemas import (
    RegisterAdvanceRequest,
    RegisterCashInHandRequest,
)
from src.crm_adjustment.application.service import AdjustmentApplicationService
from src.crm_common.database import get_db_session
from src.crm_common.response import ApiResponse, success_response, with_request_id

router = APIRouter(prefix="/adjustments", tags=["adjustments"])

_service = AdjustmentApplicationService()


def _wrap(data: BaseModel, request: Request) -> ApiResponse:
    return with_request_id(success_response(data.model_dump()), request)


@router.post("/advances")
async def register_advance(
    body: RegisterAdvanceRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.register_advance(
        db, body.vendor_id, body.entry_date, body.amount, body.reason
    )
    return _wrap(data, request)


@router.get("/advances/{vendor_id}")
async def pending_advances(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    return _wrap(await _service.pending_advances(db, vendor_id), request)


@router.post("/advances/{entry_id}/cancel")
async def cancel_advance(
    entry_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    return _wrap(await _service.cancel_advance(db, entry_id), request)


@router.post("/cash-in-hand")
async def register_cash_in_hand(
    body: RegisterCashInHandRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.register_cash_in_hand(
        db, body.vendor_id, body.entry_date, body.client_id, body.amount, body.concept
    )
    return _wrap(data, request)


@router.get("/cash-in-hand/{vendor_id}")
async def pending_cash_in_hand(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    return _wrap(await _service.pending_cash_in_hand(db, vendor_id), request)


@router.post("/cash-in-hand/{entry_id}/cancel")
async def cancel_cash_in_hand(
    entry_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    return _wrap(await _service.cancel_cash_in_hand(db, entry_id), request)


@router.get("/summary/{vendor_id}")
async def adjustment_summary(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    return _wrap(await _service.adjustment_summary(db, vendor_id), request)
