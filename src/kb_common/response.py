"""Response envelope shared by every kb_session endpoint.

    {"code": 0, "message": "success", "data": {...}, "timestamp": "...", "request_id": "req_..."}

`code` is 0 on success and the AppError code otherwise; `data` is null on
error. The request id is the one RequestLogMiddleware put on request.state,
so the body and the X-Request-ID header always agree.
"""

import uuid
from typing import Any

from pydantic import BaseModel, Field

from src.kb_common.datetime_utils import utc_now
from src.kb_common.errors import AppError


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:12]}"


class ApiResponse(BaseModel):
    code: int = 0
    message: str = "success"
    data: Any = None
    timestamp: str = Field(default_factory=lambda: utc_now().isoformat())
    request_id: str = Field(default_factory=new_request_id)


def success_response(data: Any = None, request_id: str | None = None) -> ApiResponse:
    return ApiResponse(data=data, request_id=request_id or new_request_id())


def error_response(code: int, message: str, request_id: str | None = None) -> ApiResponse:
    return ApiResponse(code=code, message=message, request_id=request_id or new_request_id())


def error_response_for(exc: AppError, request_id: str | None = None) -> ApiResponse:
    return error_response(exc.code, exc.message, request_id)
