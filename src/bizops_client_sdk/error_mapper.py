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

DEFAULT_ERROR_MESSAGE = "Request failed"

_ERRORS_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}


def _text(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def extract_message(payload: Mapping[str, object] | None, fallback: str = DEFAULT_ERROR_MESSAGE) -> str:
    """Pick the human message out of an error body.

    The backend answers with ``{"message": ...}``, ``{"error": "..."}`` or
    ``{"error": {"message": ...}}`` depending on the route.
    """
    if not payload:
        return fallback
    error = payload.get("error")
    nested = error.get("message") if isinstance(error, Mapping) else None
    return _text(payload.get("message")) or _text(error) or _text(nested) or fallback


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return _ERRORS_BY_STATUS.get(status_code, ApiError)


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    body = dict(payload or {})
    body_trace = body.get("trace_id") or body.get("requestId")
    return error_class_for(status_code)(
        code=str(body.get("code") or "HTTP_ERROR"),
        message=extract_message(body),
        details=body.get("details") or body.get("errors"),
        trace_id=str(body_trace) if body_trace is not None else trace_id,
        status_code=status_code,
        raw_payload=body,
    )
