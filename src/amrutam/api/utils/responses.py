from typing import Any, Optional

from ..schemas.common import ApiResponse, ErrorResponse


def ok(data: Any = None, message: Optional[str] = None) -> ApiResponse[Any]:
    return ApiResponse(status="success", message=message, data=data)


def fail(message: str, error: Any = None) -> ErrorResponse:
    return ErrorResponse(status="error", message=message, error=error)
