"""Auth API router: admin login.

Returns ApiResponse; request_id is read from request.state (injected by
RequestLogMiddleware).
"""

from fastapi import APIRouter, Request, status

from src.cf_common.response import ApiResponse, success_response
from src.cf_gateway.admin.schemas import LoginRequest
from src.cf_gateway.admin.service import AdminAuthService

router = APIRouter(prefix="/auth", tags=["auth"])
_service = AdminAuthService()


def get_request_id(request: Request) -> str:
    """Read request_id injected by RequestLogMiddleware, fallback if absent."""
    return getattr(request.state, "request_id", "req_unknown")


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=ApiResponse,
    summary="Admin login",
)
async def login(request: Request, body: LoginRequest) -> ApiResponse:
    data = await _service.login(body.password)
    resp = success_response(data)
    resp.request_id = get_request_id(request)
    resp.message = "Login successful"
    return resp
