from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..models_sales import RefundMode, ReturnCreateRequest, ReturnLineRequest, ReturnRecord, Sale
from ..totals import compute_refund_amount
from ..validation import validate_return_payload
from .base import BaseClient, unwrap_list


@dataclass
class ReturnsClient(BaseClient):
    def create_return(
        self,
        payload: ReturnCreateRequest | Mapping[str, Any],
        *,
        available_quantities: Mapping[str, int] | None = None,
    ) -> list[ReturnRecord]:
        request = validate_return_payload(payload, available_quantities=available_quantities)
        data = self._request(
            "POST",
            "/sales/returns",
            json_body=request.to_payload(),
            module="returns",
            operation="create",
        )
        rows = unwrap_list(data, "returns", "returnItems")
        return [ReturnRecord.model_validate(row) for row in rows if isinstance(row, dict)]

    def list_returns(self, store_id: str | None = None) -> list[ReturnRecord]:
        params = {"storeId": store_id or self.store_id}
        payload = self._request("GET", "/sales/returns", params=params, module="returns", operation="list")
        rows = unwrap_list(payload, "returns")
        return [ReturnRecord.model_validate(row) for row in rows if isinstance(row, dict)]


def build_return_request(
    sale: Sale,
    selections: Sequence[Mapping[str, Any]],
    *,
    mode: RefundMode | str = RefundMode.PERCENTAGE,
    value: Any = 100,
) -> ReturnCreateRequest:
    """Build a return for the chosen lines of ``sale`` with client-side refund amounts.

    Each selection names a ``product_id`` and ``quantity`` and may carry
    ``reason``, ``return_category`` and ``is_product_returned``.
    """
    lines_by_product = {line.product_id: line for line in sale.sale_items}
    items: list[ReturnLineRequest] = []
    for selection in selections:
        line = lines_by_product.get(str(selection.get("product_id")))
        if line is None:
            continue
        quantity = int(selection.get("quantity", 0) or 0)
        items.append(
            ReturnLineRequest(
                product_id=line.product_id,
                plu_upc=line.plu_upc,
                is_product_returned=bool(selection.get("is_product_returned", True)),
                quantity=quantity,
                refund_amount=compute_refund_amount(
                    selling_price=line.selling_price,
                    quantity=quantity,
                    mode=mode,
                    value=value,
                ),
                return_category=selection.get("return_category") or "SALEABLE",
                reason=selection.get("reason") or "",
            )
        )
    return ReturnCreateRequest(sale_id=sale.id, return_items=items)


def returnable_quantities(sale: Sale) -> dict[str, int]:
    return {line.product_id: line.quantity for line in sale.sale_items}
