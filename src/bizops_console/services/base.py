from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from bizops_client_sdk import ApiSession, to_user_facing_error
from bizops_client_sdk.exceptions import ApiError, PermissionDeniedError, RequestSupersededError, TransportError
from bizops_client_sdk.validation import ClientValidationError

from ..state import NoStoreSelectedError, StoreContext
from ..stores import CollectionState, RecordState, StateBusyError
from ..telemetry import EventCategory, TelemetryLogger, build_event

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError(RuntimeError):
    message: str
    details: str | None = None
    trace_id: str | None = None
    code: str | None = None

    def __str__(self) -> str:
        return self.message


def normalize_error(exc: Exception, fallback: str) -> ServiceError:
    """Turn any SDK failure into the message shown in the screen's error banner."""
    if isinstance(exc, ServiceError):
        return exc
    if isinstance(exc, TransportError):
        return ServiceError(message=fallback, details=exc.message, trace_id=exc.trace_id, code=exc.code)
    if isinstance(exc, ApiError):
        user_facing = to_user_facing_error(exc, fallback)
        return ServiceError(
            message=user_facing.message,
            details=user_facing.technical_details,
            trace_id=user_facing.trace_id,
            code=exc.code,
        )
    if isinstance(exc, ClientValidationError):
        return ServiceError(message=str(exc), details="CLIENT_VALIDATION", code="CLIENT_VALIDATION")
    if isinstance(exc, (NoStoreSelectedError, StateBusyError)):
        return ServiceError(message=str(exc), code=type(exc).__name__)
    # Unreadable payloads and other unexpected failures keep their text out of the banner.
    return ServiceError(message=fallback, details=f"{type(exc).__name__}: {exc}", code="UNEXPECTED_ERROR")


class ServiceBase:
    module = "console"

    def __init__(
        self,
        session: ApiSession,
        store: StoreContext | None = None,
        *,
        telemetry: TelemetryLogger | None = None,
    ) -> None:
        self.session = session
        self.store = store or StoreContext(session)
        self.telemetry = telemetry or TelemetryLogger(enabled=False)

    def _emit_result(
        self,
        action: str,
        started: float,
        *,
        error: ServiceError | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        category = EventCategory.API_CALL_RESULT
        if error is not None and error.code in {"PERMISSION_DENIED", "FORBIDDEN"}:
            category = EventCategory.PERMISSION_DENIED
        self.telemetry.emit(
            build_event(
                category=category,
                name=f"{self.module}_{action}",
                module=self.module,
                action=action,
                store_id=self.store.store_id,
                trace_id=error.trace_id if error else self.session.trace.trace_id if self.session.trace else None,
                duration_ms=int((time.monotonic() - started) * 1000),
                success=error is None,
                error_code=error.code if error else None,
                context=context,
            )
        )

    def _failed(self, action: str, exc: Exception, fallback: str, started: float) -> ServiceError:
        error = normalize_error(exc, fallback)
        if isinstance(exc, PermissionDeniedError):
            error = ServiceError(error.message, error.details, error.trace_id, "PERMISSION_DENIED")
        logger.warning(
            f"{self.module}_{action}_failed",
            extra={"error_code": error.code, "trace_id": error.trace_id, "detail": error.details},
        )
        self._emit_result(action, started, error=error)
        return error

    def _fetch(
        self,
        state: CollectionState[Any] | RecordState[Any],
        action: str,
        fallback: str,
        context_key: str,
        call: Callable[[int], T],
    ) -> T | None:
        """Run a read bound to ``context_key``; the newest read for a context wins.

        Returns ``None`` without touching ``state`` when a newer read for the
        same context was issued before this one finished.
        """
        started = time.monotonic()
        http = self.session.http
        version = http.switch_context(context_key)
        state.begin()
        try:
            result = call(version)
        except RequestSupersededError:
            logger.debug(f"{self.module}_{action}_superseded", extra={"context_version": version})
            return None
        except Exception as exc:
            if http.get_context_version(context_key) != version:
                return None
            error = self._failed(action, exc, fallback, started)
            state.fail(error.message)
            raise error from exc
        self._emit_result(action, started)
        return result

    def _mutate(
        self,
        state: CollectionState[Any] | RecordState[Any],
        action: str,
        fallback: str,
        call: Callable[[], T],
        apply: Callable[[T], None] | None = None,
    ) -> T:
        started = time.monotonic()
        try:
            state.begin(exclusive=True)
        except StateBusyError as exc:
            raise self._failed(action, exc, fallback, started) from exc
        try:
            result = call()
        except Exception as exc:
            error = self._failed(action, exc, fallback, started)
            state.fail(error.message)
            raise error from exc
        if apply is not None:
            apply(result)
        state.loading = False
        self._emit_result(action, started)
        return result
