from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import urljoin

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import RequestSupersededError, TransportError
from .tracing import TraceContext

logger = logging.getLogger(__name__)

JsonBody = dict[str, Any] | list[Any]

# Only reads are replayed; a duplicated sale or verification is worse than an error.
RETRYABLE_METHODS = frozenset({"GET", "HEAD"})


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    """JSON-over-HTTP transport shared by every resource client of a session.

    Besides retries and error mapping it keeps one version counter per
    *context* (usually a screen's list query). A request bound to a context
    version that has since been superseded raises
    :class:`RequestSupersededError` instead of returning its body.
    """

    config: ClientConfig
    trace: TraceContext | None = None
    session: requests.Session | None = None
    sleep: Callable[[float], None] = time.sleep
    last_operation: LastOperation | None = None
    _context_versions: dict[str, int] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = _pooled_session(self.config.max_connections)

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: JsonBody | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> JsonBody | None:
        """Send one request and return the decoded JSON body (``None`` when empty)."""
        verb = method.upper()
        trace = self.trace or TraceContext()
        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)
        started = time.monotonic()

        def finish(result: str) -> None:
            self.last_operation = LastOperation(
                module=module,
                operation=operation,
                duration_ms=int((time.monotonic() - started) * 1000),
                result=result,
                trace_id=trace.trace_id,
            )

        try:
            response = self._send(
                verb,
                urljoin(self.config.api_base_url.rstrip("/") + "/", path.lstrip("/")),
                headers={"Accept": "application/json", **(headers or {}), **trace.outgoing_headers()},
                json_body=json_body,
                params=_clean_params(params),
            )
        except requests.RequestException as exc:
            finish("error")
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc) or "Network error",
                details={"type": type(exc).__name__},
                trace_id=trace.trace_id,
                status_code=0,
            ) from exc

        if context_key and self.get_context_version(context_key) != context_version:
            finish("superseded")
            raise RequestSupersededError(
                code="REQUEST_SUPERSEDED",
                message="A newer request replaced this one",
                details={"context_key": context_key, "context_version": context_version},
                trace_id=trace.trace_id,
                status_code=0,
            )

        trace.adopt(headers=response.headers)
        if response.ok:
            finish("success")
            return response.json() if response.content else None

        payload = _error_payload(response)
        trace.adopt(payload=payload)
        finish("error")
        raise map_error(response.status_code, payload, trace.trace_id)

    def switch_context(self, context_key: str) -> int:
        """Open a new version of ``context_key``; earlier in-flight requests become stale."""
        version = self.get_context_version(context_key) + 1
        self._context_versions[context_key] = version
        return version

    def get_context_version(self, context_key: str) -> int:
        return self._context_versions.get(context_key, 0)

    def _send(self, verb: str, url: str, **kwargs: Any) -> requests.Response:
        attempts = self.config.retries + 1 if verb in RETRYABLE_METHODS else 1
        for attempt in range(1, attempts + 1):
            last = attempt == attempts
            try:
                response = self.session.request(
                    method=verb,
                    url=url,
                    headers=kwargs["headers"],
                    json=kwargs["json_body"],
                    params=kwargs["params"],
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if last:
                    raise
                reason: object = type(exc).__name__
            else:
                if response.status_code < 500 or last:
                    return response
                reason = response.status_code
            logger.debug("http_retry", extra={"url": url, "attempt": attempt, "reason": reason})
            self.sleep(self.config.retry_backoff_seconds * (2 ** (attempt - 1)))
        raise RuntimeError("unreachable: retry loop exited without a response")


def _pooled_session(max_connections: int) -> requests.Session:
    session = requests.Session()
    adapter = HTTPAdapter(pool_connections=max_connections, pool_maxsize=max_connections)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def _error_payload(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {"message": response.text}
    return payload if isinstance(payload, dict) else {"details": payload}


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    return {key: value for key, value in params.items() if value is not None and value != ""}
