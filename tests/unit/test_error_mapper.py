from __future__ import annotations

from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.sdk.error_mapper import map_error
from stockdesk.sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    InvalidResponseError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    TransportError,
    ValidationError,
)
from stockdesk.sdk.validation import ClientValidationError, ValidationIssue


def test_map_error_classes() -> None:
    assert isinstance(map_error(401, {"message": "bad"}, "t"), AuthError)
    assert isinstance(map_error(403, {"message": "no"}, "t"), PermissionDeniedError)
    assert isinstance(map_error(404, {}, "t"), NotFoundError)
    assert isinstance(map_error(422, {}, "t"), ValidationError)
    assert isinstance(map_error(409, {"message": "SKU already exists"}, "t"), ConflictError)
    server = map_error(503, {"message": "down"}, "trace-503")
    assert isinstance(server, ServerError)
    assert "trace_id=trace-503" in str(server)


def test_code_and_message_default_from_status() -> None:
    err = map_error(429, None, "t")
    assert isinstance(err, RateLimitError)
    assert (err.code, err.message) == ("RATE_LIMITED", "Request failed with status 429")
    assert err.server_message is None
    odd = map_error(418, {"code": "TEAPOT", "message": "short and stout"}, None)
    assert type(odd) is ApiError
    assert (odd.code, odd.server_message) == ("TEAPOT", "short and stout")


def test_to_message_prefers_server_message() -> None:
    err = map_error(409, {"message": "Email already exists"}, None)
    assert ErrorMapper.to_message(err, "Failed to update user") == "Email already exists"


def test_to_message_falls_back_without_server_message() -> None:
    err = map_error(500, {"details": "<html>oops</html>"}, None)
    assert ErrorMapper.to_message(err, "Failed to load products") == "Failed to load products"
    transport = TransportError(code="TRANSPORT_ERROR", message="refused", details=None, trace_id=None, status_code=0)
    assert ErrorMapper.to_message(transport, "Failed to delete product") == "Failed to delete product"


def test_to_message_uses_local_validation_reason() -> None:
    err = ClientValidationError([ValidationIssue(field="sku", reason="SKU already exists")])
    assert ErrorMapper.to_message(err, "Failed to create product") == "SKU already exists"


def test_invalid_response_message_is_shown() -> None:
    err = InvalidResponseError(
        code="INVALID_RESPONSE", message="Invalid response from server", details=None, trace_id=None, status_code=200
    )
    assert ErrorMapper.to_message(err, "Invalid email or password") == "Invalid response from server"


def test_to_payload_categories() -> None:
    payload = ErrorMapper.to_payload(map_error(403, {"code": "FORBIDDEN", "message": "no"}, "t-1"))
    assert payload["category"] == "permission"
    assert payload["trace_id"] == "t-1"
    local = ErrorMapper.to_payload(ClientValidationError([ValidationIssue(field="email", reason="x")]))
    assert local["category"] == "validation"
    assert local["fields"] == ["email"]
    assert ErrorMapper.to_payload(RuntimeError("x"))["category"] == "internal"
