"""cf_member REST API — reads are public, mutations require the admin token."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.database import get_db_session
from src.cf_common.response import ApiResponse, success_response
from src.cf_gateway.api.router import get_request_id
from src.cf_gateway.auth.dependencies import require_admin
from src.cf_member.application.schemas import MemberCreateRequest, MemberUpdateRequest
from src.cf_member.application.service import MemberApplicationService

router = APIRouter(prefix="/members", tags=["members"])

_service = MemberApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get("")
async def list_members(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.list_members(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


# Declared before /{member_id} so the literal path wins.
@router.get("/with-deposits")
async def list_members_with_deposits(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.list_members_with_deposits(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/{member_id}")
async def get_member(member_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _service.get_member(db, member_id)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_member(
    body: MemberCreateRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.create_member(db, body)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Member created"
    return resp


@router.put("/{member_id}", dependencies=[Depends(require_admin)])
async def update_member(
    member_id: str, body: MemberUpdateRequest, db: DbSession, request: Request
) -> ApiResponse:
    data = await _service.update_member(db, member_id, body)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Member updated"
    return resp


@router.delete("/{member_id}", dependencies=[Depends(require_admin)])
async def delete_member(member_id: str, db: DbSession, request: Request) -> ApiResponse:
    await _service.delete_member(db, member_id)
    resp = success_response({"id": member_id})
    resp.request_id = get_request_id(request)
    resp.message = "Member deleted"
    return resp
