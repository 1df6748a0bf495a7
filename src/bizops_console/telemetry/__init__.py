from .events import TELEMETRY_CATEGORIES, EventCategory, TelemetryEvent, build_event, pii_keys
from .logger import TelemetryLogger

__all__ = ["TELEMETRY_CATEGORIES", "EventCategory", "TelemetryEvent", "TelemetryLogger", "build_event", "pii_keys"]
