from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..http_client import HttpClient
from ..models import PaginationMeta


@dataclass
class BaseClient:
    http: HttpClient
    access_token: str | None = None
    store_id: str | None = None

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        if self.store_id:
            headers["X-Store-ID"] = self.store_id
        return headers

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        merged = {**self._auth_headers(), **headers}
        return self.http.request(method, path, headers=merged, **kwargs)


def unwrap_data(payload: Any) -> Any:
    """Strip the ``{"data": ...}`` envelope the backend uses on most endpoints."""
    if isinstance(payload, dict) and "data" in payload:
        return payload["data"]
    return payload


def unwrap_list(payload: Any, *keys: str) -> list[Any]:
    """Find the record list in any of the envelope shapes the backend returns.

    Accepts a bare list, ``{"data": [...]}``, ``{"data": {"<key>": [...]}}``
    and ``{"<key>": [...]}``; anything else yields an empty list.
    """
    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []
    data = payload.get("data")
    if isinstance(data, list):
        return data
    for container in (data, payload):
        if isinstance(container, dict):
            for key in keys:
                value = container.get(key)
                if isinstance(value, list):
                    return value
    return []


def unwrap_pagination(payload: Any, *, count: int, page: int, limit: int) -> PaginationMeta:
    fallback = PaginationMeta.for_items(count, page, limit)
    if not isinstance(payload, dict):
        return fallback
    raw = payload.get("pagination")
    if raw is None and isinstance(payload.get("data"), dict):
        raw = payload["data"].get("pagination")
    if not isinstance(raw, dict):
        return fallback
    return PaginationMeta.model_validate({**fallback.to_payload(), **raw})


def require_object(payload: Any, what: str) -> dict[str, Any]:
    data = unwrap_data(payload)
    if not isinstance(data, dict):
        raise ValueError(f"Expected {what} response to be a JSON object")
    return data
