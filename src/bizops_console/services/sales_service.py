from __future__ import annotations

import logging
from typing import Any, Mapping

from bizops_client_sdk.clients.sales_client import SALES_CONTEXT, SaleListResponse
from bizops_client_sdk.models_sales import Sale, SaleQuery
from bizops_client_sdk.totals import InvoiceTotals, compute_invoice_totals

from ..stores import CollectionState
from .base import ServiceBase

logger = logging.getLogger(__name__)


class SalesService(ServiceBase):
    module = "sales"

    def __init__(self, *args: Any, state: CollectionState[Sale] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[Sale] = state or CollectionState()

    def fetch_sales(self, filters: Mapping[str, Any] | None = None, *, page: int = 1, limit: int = 20) -> SaleListResponse | None:
        def _call(version: int) -> SaleListResponse:
            query = SaleQuery.model_validate(
                {**(filters or {}), "store_id": self.store.require(), "page": page, "limit": limit}
            )
            return self.session.sales_client().list_sales(query, context_version=version)

        result = self._fetch(self.state, "fetch", "Failed to fetch sales", SALES_CONTEXT, _call)
        if result is not None:
            self.state.succeed(result.sales, result.pagination)
        return result

    def get_sale(self, sale_id: str) -> Sale:
        return self._mutate(
            self.state,
            "get",
            "Failed to fetch sale",
            lambda: self.session.sales_client().get_sale(sale_id),
            self._upsert,
        )

    def create_sale(self, payload: Mapping[str, Any]) -> Sale:
        def _call() -> Sale:
            data = dict(payload)
            if not data.get("storeId") and not data.get("store_id"):
                data["store_id"] = self.store.require()
            return self.session.sales_client().create_sale(data)

        sale = self._mutate(self.state, "create", "Failed to create sale", _call, self.state.append)
        logger.info("sale_created", extra={"sale_id": sale.id, "line_count": len(sale.sale_items)})
        return sale

    def update_sale(self, sale_id: str, payload: Mapping[str, Any]) -> Sale:
        return self._mutate(
            self.state,
            "update",
            "Failed to update sale",
            lambda: self.session.sales_client().update_sale(sale_id, payload),
            self._upsert,
        )

    @staticmethod
    def draft_totals(lines: list[Any], *, discount: Any = 0, discount_type: str = "percentage", tax_rate: Any = 0) -> InvoiceTotals:
        return compute_invoice_totals(lines, discount=discount, discount_type=discount_type, tax_rate=tax_rate)

    def _upsert(self, sale: Sale) -> None:
        if not self.state.replace(sale):
            self.state.append(sale)
