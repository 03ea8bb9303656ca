"""cf_cow_purchase REST API.

Create and update take multipart/form-data so a receipt image can ride along
in the ``receipt`` file field. ``participating_members`` is a repeated form
field (comma-joined ids are accepted as well).
"""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.cf_common.database import get_db_session
from src.cf_common.response import ApiResponse, success_response
from src.cf_common.validation import parse_model
from src.cf_cow_purchase.application.schemas import (
    CowPurchaseCreateRequest,
    CowPurchaseUpdateRequest,
)
from src.cf_cow_purchase.application.service import CowPurchaseApplicationService
from src.cf_gateway.api.router import get_request_id
from src.cf_gateway.auth.dependencies import require_admin

router = APIRouter(prefix="/cow-purchases", tags=["cow-purchases"])

_service = CowPurchaseApplicationService()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def _form_values(
    amount: str | None,
    date: str | None,
    participating_members: list[str] | None,
    notes: str | None,
) -> dict[str, Any]:
    """Drop absent and blank fields; notes may legitimately be cleared to ""."""
    values: dict[str, Any] = {}
    if amount not in (None, ""):
        values["amount"] = amount
    if date not in (None, ""):
        values["date"] = date
    if participating_members is not None:
        values["participating_members"] = participating_members
    if notes is not None:
        values["notes"] = notes
    return values


def _present(receipt: UploadFile | None) -> UploadFile | None:
    # Browsers send an empty part with no filename when no file was chosen.
    return receipt if receipt is not None and receipt.filename else None


@router.get("")
async def list_cow_purchases(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.list_cow_purchases(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/summary/stats")
async def cow_purchase_summary(db: DbSession, request: Request) -> ApiResponse:
    data = await _service.get_summary(db)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.get("/{purchase_id}")
async def get_cow_purchase(purchase_id: str, db: DbSession, request: Request) -> ApiResponse:
    data = await _service.get_cow_purchase(db, purchase_id)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    return resp


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_cow_purchase(
    db: DbSession,
    request: Request,
    amount: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    participating_members: Annotated[list[str] | None, Form()] = None,
    notes: Annotated[str | None, Form()] = None,
    receipt: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse:
    body = parse_model(
        CowPurchaseCreateRequest,
        _form_values(amount, date, participating_members or [], notes),
    )
    data = await _service.create_cow_purchase(db, body, _present(receipt))
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Cow purchase created"
    return resp


@router.put("/{purchase_id}", dependencies=[Depends(require_admin)])
async def update_cow_purchase(
    purchase_id: str,
    db: DbSession,
    request: Request,
    amount: Annotated[str | None, Form()] = None,
    date: Annotated[str | None, Form()] = None,
    participating_members: Annotated[list[str] | None, Form()] = None,
    notes: Annotated[str | None, Form()] = None,
    receipt: Annotated[UploadFile | None, File()] = None,
) -> ApiResponse:
    body = parse_model(
        CowPurchaseUpdateRequest,
        _form_values(amount, date, participating_members, notes),
    )
    data = await _service.update_cow_purchase(db, purchase_id, body, _present(receipt))
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Cow purchase updated"
    return resp


@router.delete("/{purchase_id}", dependencies=[Depends(require_admin)])
async def delete_cow_purchase(purchase_id: str, db: DbSession, request: Request) -> ApiResponse:
    await _service.delete_cow_purchase(db, purchase_id)
    resp = success_response({"id": purchase_id})
    resp.request_id = get_request_id(request)
    resp.message = "Cow purchase deleted"
    return resp
