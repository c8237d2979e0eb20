from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    def __str__(self) -> str:
        trace = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{trace}"

    @property
    def server_message(self) -> str | None:
        """The ``message`` field exactly as the server sent it, if any."""
        if isinstance(self.raw_payload, dict):
            message = self.raw_payload.get("message")
            if isinstance(message, str) and message.strip():
                return message
        return None


class AuthError(ApiError):
    """Authentication failed or session is invalid."""


class PermissionDeniedError(ApiError):
    """The server refused the operation for the current role."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors (duplicate sku/email)."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class InvalidResponseError(ApiError):
    """A 2xx response whose body is missing required fields."""
