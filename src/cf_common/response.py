"""Response envelope shared by every ledger endpoint.

{
    "code": 0,           // 0 = success, otherwise an AppError code
    "message": "success",
    "data": { ... },     // record, list or summary; null or field errors on failure
    "timestamp": "...",
    "request_id": "..."  // same value as the X-Request-ID header
}

Payload models are dumped in JSON mode before they go into ``data`` so that
amounts leave as numbers (see money.AmountOut) rather than Decimal strings.
"""

import uuid
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def _payload(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, Sequence) and not isinstance(data, str):
        return [_payload(item) for item in data]
    return data


def success_response(data: Any = None) -> ApiResponse:
    return ApiResponse(code=0, message="success", data=_payload(data))


def error_response(code: int, message: str, data: Any = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, data=data)
