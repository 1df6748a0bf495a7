from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import Field

from ..models import ApiModel, PaginationMeta
from ..models_sales import Sale, SaleCreateRequest, SaleQuery, SaleUpdateRequest
from ..validation import validate_sale_payload
from .base import BaseClient, require_object, unwrap_list, unwrap_pagination

SALES_CONTEXT = "sales.list"

# Dropdown values that mean "no filter".
_ALL_SENTINELS = {"all", "all status", "all methods"}


class SaleListResponse(ApiModel):
    sales: list[Sale] = Field(default_factory=list)
    pagination: PaginationMeta = Field(default_factory=PaginationMeta)


@dataclass
class SalesClient(BaseClient):
    def create_sale(self, payload: SaleCreateRequest | Mapping[str, Any]) -> Sale:
        request = validate_sale_payload(payload)
        data = self._request(
            "POST",
            "/sales/create",
            json_body=request.to_payload(),
            module="sales",
            operation="create",
        )
        return Sale.model_validate(require_object(data, "create sale"))

    def list_sales(self, query: SaleQuery, *, context_version: int | None = None) -> SaleListResponse:
        payload = self._request(
            "GET",
            "/sales/list",
            params=build_sales_params(query),
            module="sales",
            operation="list",
            context_key=SALES_CONTEXT,
            context_version=context_version,
        )
        rows = unwrap_list(payload, "sales")
        sales = [Sale.model_validate(row) for row in rows if isinstance(row, dict)]
        pagination = unwrap_pagination(payload, count=len(sales), page=query.page, limit=query.limit)
        return SaleListResponse(sales=sales, pagination=pagination)

    def get_sale(self, sale_id: str) -> Sale:
        data = self._request("GET", f"/sales/{sale_id}", module="sales", operation="get")
        return Sale.model_validate(require_object(data, "sale"))

    def update_sale(self, sale_id: str, payload: SaleUpdateRequest | Mapping[str, Any]) -> Sale:
        request = payload if isinstance(payload, SaleUpdateRequest) else SaleUpdateRequest.model_validate(payload)
        data = self._request(
            "PUT",
            f"/sales/{sale_id}",
            json_body=request.to_payload(),
            module="sales",
            operation="update",
        )
        return Sale.model_validate(require_object(data, "update sale"))


def build_sales_params(query: SaleQuery) -> dict[str, Any]:
    params = query.to_payload()
    for key in ("status", "paymentMethod"):
        value = params.get(key)
        if not isinstance(value, str) or value.strip().lower() in _ALL_SENTINELS:
            params.pop(key, None)
        else:
            params[key] = value.strip().upper()
    return params
