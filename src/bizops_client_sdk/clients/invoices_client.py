from __future__ import annotations

from dataclasses import dataclass

from ..models_sales import Invoice
from .base import BaseClient, unwrap_list


@dataclass
class InvoicesClient(BaseClient):
    def list_invoices(self, store_id: str | None = None) -> list[Invoice]:
        target = store_id or self.store_id
        if not target:
            raise ValueError("store_id is required to list invoices")
        payload = self._request("GET", f"/invoice/store/{target}", module="invoices", operation="list")
        rows = unwrap_list(payload, "invoices")
        return [Invoice.model_validate(row) for row in rows if isinstance(row, dict)]
