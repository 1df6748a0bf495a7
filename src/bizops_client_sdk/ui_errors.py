from __future__ import annotations

from dataclasses import dataclass

from .error_mapper import DEFAULT_ERROR_MESSAGE
from .exceptions import ApiError


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None

    @property
    def technical_details(self) -> str | None:
        if self.details:
            return self.details
        return None


def to_user_facing_error(exc: ApiError, fallback: str = DEFAULT_ERROR_MESSAGE) -> UserFacingError:
    primary = (exc.message or "").strip()
    if not primary or primary == DEFAULT_ERROR_MESSAGE:
        primary = fallback
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
