"""cf_deposit REST API — reads are public, mutations require the admin token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.database import get_db_session
from src.cf_common.response import ApiResponse, success_response
from src.cf_deposit.application.schemas import DepositCreateRequest, DepositUpdateRequest
from src.cf_deposit.application.service import DepositApplicationService
from src.cf_gateway.api.router import get_request_id
from src.cf_gateway.auth.dependencies import require_admin

router = APIRouter(prefix="/deposits", tags=["deposits"])

_service = DepositApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("")
async def list_deposits(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.list_deposits(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/summary/stats")
async def deposit_summary(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.get_summary(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/member/{member_id}")
async def list_member_deposits(member_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _service.list_member_deposits(db, member_id)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/{deposit_id}")
async def get_deposit(deposit_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _service.get_deposit(db, deposit_id)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_deposit(
    body: DepositCreateRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.create_deposit(db, body)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Deposit created"
    return resp


@router.put("/{deposit_id}", dependencies=[Depends(require_admin)])
async def update_deposit(
    deposit_id: str, body: DepositUpdateRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.update_deposit(db, deposit_id, body)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Deposit updated"
    return resp


@router.delete("/{deposit_id}", dependencies=[Depends(require_admin)])
async def delete_deposit(deposit_id: str, db: DbSession, request: Request) -> ApiResponse:
    await _service.delete_deposit(db, deposit_id)
    resp = success_response({"id": deposit_id})
    resp.request_id = get_request_id(request)
    resp.message = "Deposit deleted"
    return resp
