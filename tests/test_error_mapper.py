from __future__ import annotations

import pytest

from bizops_client_sdk.error_mapper import DEFAULT_ERROR_MESSAGE, extract_message, map_error
from bizops_client_sdk.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    RateLimitError,
    ServerError,
    ValidationError,
)
from bizops_client_sdk.ui_errors import to_user_facing_error


@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (401, AuthError),
        (403, PermissionDeniedError),
        (404, NotFoundError),
        (400, ValidationError),
        (422, ValidationError),
        (409, ConflictError),
        (429, RateLimitError),
        (503, ServerError),
        (418, ApiError),
    ],
)
def test_map_error_by_status(status: int, expected: type[ApiError]) -> None:
    error = map_error(status, {"message": "nope"}, "trace-1")
    assert type(error) is expected
    assert error.status_code == status
    assert error.message == "nope"
    assert error.trace_id == "trace-1"


def test_extract_message_prefers_message_then_error() -> None:
    assert extract_message({"message": "m", "error": "e"}) == "m"
    assert extract_message({"error": "e"}) == "e"
    assert extract_message({"error": {"message": "nested"}}) == "nested"
    assert extract_message({"success": False}) == DEFAULT_ERROR_MESSAGE
    assert extract_message(None, "fallback") == "fallback"


def test_map_error_reads_payload_trace_and_details() -> None:
    error = map_error(422, {"code": "BAD", "errors": [{"field": "email"}], "requestId": "req-9"}, "trace-1")
    assert error.code == "BAD"
    assert error.details == [{"field": "email"}]
    assert error.trace_id == "req-9"
    assert "[422] BAD" in str(error)


def test_user_facing_error_uses_fallback_for_generic_message() -> None:
    error = map_error(500, {}, None)
    facing = to_user_facing_error(error, "Failed to fetch employees")
    assert facing.message == "Failed to fetch employees"
    assert facing.technical_details == "HTTP_ERROR (HTTP 500)"


def test_user_facing_error_keeps_backend_message() -> None:
    error = map_error(409, {"message": "Employee code already exists"}, None)
    assert to_user_facing_error(error, "Failed to create employee").message == "Employee code already exists"
