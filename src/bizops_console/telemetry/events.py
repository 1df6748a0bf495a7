from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping


class EventCategory(str, Enum):
    AUTH = "auth"
    STORE = "store"
    API_CALL_RESULT = "api_call_result"
    ERROR = "error"
    PERMISSION_DENIED = "permission_denied"


TELEMETRY_CATEGORIES = frozenset(category.value for category in EventCategory)

# Employee, customer and credential fields never leave the machine.
PII_CONTEXT_KEYS = frozenset(
    {
        "email",
        "password",
        "phone",
        "full_name",
        "first_name",
        "last_name",
        "customer_name",
        "driver_name",
        "address",
        "token",
        "authorization",
        "card_number",
    }
)


def pii_keys(context: Mapping[str, Any] | None, prefix: str = "") -> list[str]:
    """Dotted paths of PII-like keys in ``context``, nested mappings included."""
    found: list[str] = []
    for key, value in (context or {}).items():
        path = f"{prefix}{key}"
        if str(key).lower() in PII_CONTEXT_KEYS:
            found.append(path)
        elif isinstance(value, Mapping):
            found.extend(pii_keys(value, f"{path}."))
    return sorted(found)


@dataclass(frozen=True)
class TelemetryEvent:
    category: str
    name: str
    module: str
    action: str
    timestamp_utc: str
    store_id: str | None = None
    trace_id: str | None = None
    duration_ms: int | None = None
    success: bool | None = None
    error_code: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self) if getattr(self, item.name) is not None}


def build_event(
    *,
    category: EventCategory | str,
    name: str,
    module: str,
    action: str,
    store_id: str | None = None,
    trace_id: str | None = None,
    duration_ms: int | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    try:
        category = EventCategory(category).value
    except ValueError:
        raise ValueError(f"Unsupported telemetry category: {category}") from None
    illegal = pii_keys(context)
    if illegal:
        raise ValueError(f"PII-like keys are forbidden in telemetry context: {illegal}")
    return TelemetryEvent(
        category=category,
        name=name,
        module=module,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        store_id=store_id,
        trace_id=trace_id,
        duration_ms=duration_ms,
        success=success,
        error_code=error_code,
        context=context,
    )
