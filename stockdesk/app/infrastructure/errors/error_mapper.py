from stockdesk.sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    InvalidResponseError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    TransportError,
    ValidationError,
)
from stockdesk.sdk.validation import ClientValidationError


class ErrorMapper:
    _CATEGORIES = (
        (TransportError, "network"),
        (AuthError, "auth"),
        (PermissionDeniedError, "permission"),
        (NotFoundError, "not_found"),
        (ValidationError, "validation"),
        (ConflictError, "conflict"),
        (ServerError, "server"),
    )

    @classmethod
    def category(cls, error: Exception) -> str:
        if isinstance(error, ClientValidationError):
            return "validation"
        for error_type, name in cls._CATEGORIES:
            if isinstance(error, error_type):
                return name
        return "internal"

    @classmethod
    def to_message(cls, error: Exception, fallback: str) -> str:
        """User-facing text: server message verbatim, else the local reason, else ``fallback``."""
        if isinstance(error, ClientValidationError):
            return error.message
        if isinstance(error, InvalidResponseError):
            return error.message
        if isinstance(error, ApiError):
            return error.server_message or fallback
        return fallback

    @classmethod
    def to_payload(cls, error: Exception) -> dict:
        if isinstance(error, ApiError):
            return {
                "code": error.code,
                "message": error.message,
                "status_code": error.status_code,
                "trace_id": error.trace_id,
                "category": cls.category(error),
            }
        if isinstance(error, ClientValidationError):
            return {
                "code": "CLIENT_VALIDATION",
                "message": error.message,
                "fields": [issue.field for issue in error.issues],
                "trace_id": None,
                "category": "validation",
            }
        return {
            "code": "INTERNAL_ERROR",
            "message": str(error),
            "trace_id": None,
            "category": "internal",
        }
