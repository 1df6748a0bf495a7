from __future__ import annotations

import json
import logging
import os
import sys
import threading
from pathlib import Path
from typing import TextIO

from platformdirs import user_log_dir

from .events import TelemetryEvent

logger = logging.getLogger(__name__)

TELEMETRY_ENV_VAR = "BIZOPS_TELEMETRY_ENABLED"


def telemetry_enabled_from_env() -> bool:
    return os.getenv(TELEMETRY_ENV_VAR, "0").strip().lower() in {"1", "true", "yes", "on"}


def default_log_file(app_name: str) -> Path:
    return Path(user_log_dir(app_name, "BizOps")) / "telemetry.jsonl"


class TelemetryLogger:
    """Append telemetry events as JSON lines; a no-op unless enabled.

    Emission is serialized because debounced searches fire from timer threads.
    """

    def __init__(
        self,
        *,
        app_name: str = "bizops",
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        stdout_sink: bool = False,
        stdout_stream: TextIO | None = None,
    ) -> None:
        self.app_name = app_name
        self.enabled = telemetry_enabled_from_env() if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else default_log_file(app_name)
        self.stdout_sink = stdout_sink
        self.stdout_stream = stdout_stream
        self._lock = threading.Lock()

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        line = json.dumps({**event.to_dict(), "app_name": self.app_name}, sort_keys=True)
        with self._lock:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with self.log_file.open("a", encoding="utf-8") as fp:
                fp.write(line + "\n")
            if self.stdout_sink:
                stream = self.stdout_stream or sys.stdout
                stream.write(line + "\n")
                stream.flush()
        logger.debug("telemetry_emitted", extra={"event_name": event.name, "category": event.category})
        return True
