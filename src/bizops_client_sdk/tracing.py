from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

REQUEST_ID_HEADER = "X-Request-ID"
PAYLOAD_TRACE_KEYS = ("trace_id", "traceId", "requestId")


@dataclass
class TraceContext:
    """Request id carried by every call of a session.

    A fresh id is minted on first use; once the backend answers with its own
    id (header or error body) that id is used from then on, so client logs
    and server logs line up.
    """

    trace_id: str | None = None

    def outgoing_headers(self) -> dict[str, str]:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return {REQUEST_ID_HEADER: self.trace_id}

    def adopt(
        self,
        headers: Mapping[str, str] | None = None,
        payload: Mapping[str, object] | None = None,
    ) -> str | None:
        """Take the backend's id from ``headers`` (case-insensitive) or an error ``payload``."""
        candidates: list[object] = []
        if headers:
            candidates.extend(value for key, value in headers.items() if key.lower() == REQUEST_ID_HEADER.lower())
        if payload:
            candidates.extend(payload.get(key) for key in PAYLOAD_TRACE_KEYS)
        for candidate in candidates:
            if isinstance(candidate, str) and candidate.strip():
                self.trace_id = candidate.strip()
                break
        return self.trace_id
