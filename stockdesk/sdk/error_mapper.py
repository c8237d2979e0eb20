from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)

_BY_STATUS: dict[int, tuple[type[ApiError], str]] = {
    400: (ValidationError, "INVALID_REQUEST"),
    401: (AuthError, "UNAUTHORIZED"),
    403: (PermissionDeniedError, "FORBIDDEN"),
    404: (NotFoundError, "NOT_FOUND"),
    409: (ConflictError, "CONFLICT"),
    422: (ValidationError, "INVALID_REQUEST"),
    429: (RateLimitError, "RATE_LIMITED"),
}


def error_class(status_code: int) -> tuple[type[ApiError], str]:
    """Exception type and default code for a non-2xx status."""
    if status_code in _BY_STATUS:
        return _BY_STATUS[status_code]
    if status_code >= 500:
        return ServerError, "SERVER_ERROR"
    return ApiError, "HTTP_ERROR"


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    """Typed error for a failed response.

    The backend only promises a ``message`` field. It is kept verbatim in
    ``raw_payload`` for display; ``code`` comes from the status unless the
    body names one.
    """
    body = dict(payload or {})
    mapped, default_code = error_class(status_code)
    message = body.get("message")
    if not isinstance(message, str) or not message.strip():
        message = f"Request failed with status {status_code}"
    return mapped(
        code=str(body.get("code") or default_code),
        message=message,
        details=body.get("details"),
        trace_id=trace_id,
        status_code=status_code,
        raw_payload=body,
    )
