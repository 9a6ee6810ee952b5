"""crm_ledger REST endpoints.

POST /ledger/movements                     - record a movement (sign fixed here)
GET  /ledger/clients/{client_id}/statement - movements with running balance
GET  /ledger/vendors/{vendor_id}/movements - a vendor's movements in a period
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.crm_common.database import get_db_session
from src.crm_common.response import ApiResponse, success_response
from src.crm_ledger.application.schemas import RecordMovementRequest
from src.crm_ledger.application.service import LedgerApplicationService

router = APIRouter(prefix="/ledger", tags=["ledger"])

_service = LedgerApplicationService()


@router.post("/movements")
async def record_movement(
    body: RecordMovementRequest,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.record_movement(
        db,
        movement_date=body.movement_date,
        client_id=body.client_id,
        vendor_id=body.vendor_id,
        kind=body.kind,
        amount=body.amount,
        document=body.document,
        note=body.note,
    )
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/clients/{client_id}/statement")
async def client_statement(
    client_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
) -> ApiResponse:
    data = await _service.client_statement(db, client_id)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp


@router.get("/vendors/{vendor_id}/movements")
async def list_vendor_movements(
    vendor_id: int,
    db: Annotated[AsyncSession, Depends(get_db_session)],
    request: Request,
    date_from: date = Query(..., description="Period start (inclusive)"),
    date_to: date = Query(..., description="Period end (inclusive)"),
) -> ApiResponse:
    data = await _service.list_vendor_movements(db, vendor_id, date_from, date_to)
    resp = success_response(data.model_dump())
    resp.request_id = getattr(request.state, "request_id", resp.request_id)
    return resp
