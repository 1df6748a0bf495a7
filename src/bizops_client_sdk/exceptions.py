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


class AuthError(ApiError):
    """Authentication failed or the session token is no longer valid."""


class PermissionDeniedError(ApiError):
    """The employee lacks the grant for this resource in this store."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    """409 or conflict-style errors."""


class RateLimitError(ApiError):
    """429 throttling error."""


class ServerError(ApiError):
    """5xx server-side failures."""


class TransportError(ApiError):
    """Network/transport failure before an HTTP response was returned."""


class RequestSupersededError(TransportError):
    """A newer request was issued for the same context before this one resolved."""


class EmployeeConflictError(ConflictError):
    pass


class OrderTrackingStateError(ValidationError):
    """The backend refused a transition on an order that is already verified or rejected."""
