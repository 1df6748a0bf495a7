from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping

from ..exceptions import ApiError, ConflictError, OrderTrackingStateError, ValidationError
from ..models_order_tracking import (
    RejectOrderRequest,
    TrackingOrder,
    TrackingOrderCreateRequest,
    TrackingOrderListResponse,
    TrackingOrderQuery,
    UpdatePaymentRequest,
    VerifyOrderRequest,
)
from ..validation import validate_payment_amount, validate_reject_payload, validate_update_payment_payload
from .base import BaseClient, require_object, unwrap_data, unwrap_list, unwrap_pagination

ORDER_TRACKING_CONTEXT = "order_tracking.list"

# Refusals of a transition on an order that is already verified or rejected.
_TERMINAL_STATE = re.compile(r"\balready (?:been )?(?:verified|rejected)\b")


@dataclass
class OrderTrackingClient(BaseClient):
    def list_orders(self, query: TrackingOrderQuery, *, context_version: int | None = None) -> TrackingOrderListResponse:
        payload = self._request(
            "GET",
            "/order-tracking",
            params=build_tracking_params(query),
            module="order_tracking",
            operation="list",
            context_key=ORDER_TRACKING_CONTEXT,
            context_version=context_version,
        )
        rows = unwrap_list(payload, "orders", "trackingOrders")
        orders = [TrackingOrder.model_validate(row) for row in rows if isinstance(row, dict)]
        pagination = unwrap_pagination(payload, count=len(orders), page=query.page, limit=query.limit)
        return TrackingOrderListResponse(orders=orders, pagination=pagination)

    def add_to_tracking(self, payload: TrackingOrderCreateRequest | Mapping[str, Any]) -> TrackingOrder:
        request = (
            payload if isinstance(payload, TrackingOrderCreateRequest) else TrackingOrderCreateRequest.model_validate(payload)
        )
        validate_payment_amount(request.payment_amount)
        data = self._request(
            "POST",
            "/order-tracking",
            json_body=request.to_payload(),
            module="order_tracking",
            operation="create",
        )
        return TrackingOrder.model_validate(require_object(data, "add to tracking"))

    def verify_order(
        self,
        order_id: str,
        *,
        payment_amount: Decimal | float | str | None = None,
        verification_notes: str | None = None,
    ) -> TrackingOrder | None:
        amount = validate_payment_amount(payment_amount) if payment_amount is not None else None
        request = VerifyOrderRequest(payment_amount=amount, verification_notes=verification_notes, store_id=self.store_id)
        return self._patch(order_id, "verify", request.to_payload())

    def reject_order(self, order_id: str, payload: RejectOrderRequest | Mapping[str, Any]) -> TrackingOrder | None:
        request = validate_reject_payload(payload)
        if request.store_id is None and self.store_id:
            request = request.model_copy(update={"store_id": self.store_id})
        return self._patch(order_id, "reject", request.to_payload())

    def update_payment(self, order_id: str, payload: UpdatePaymentRequest | Mapping[str, Any]) -> TrackingOrder | None:
        request = validate_update_payment_payload(payload)
        if request.store_id is None and self.store_id:
            request = request.model_copy(update={"store_id": self.store_id})
        return self._patch(order_id, "payment", request.to_payload())

    def _patch(self, order_id: str, action: str, body: dict[str, Any]) -> TrackingOrder | None:
        try:
            data = self._request(
                "PATCH",
                f"/order-tracking/{order_id}/{action}",
                json_body=body,
                module="order_tracking",
                operation=action,
            )
        except ApiError as exc:
            _raise_tracking_error(exc)
        record = unwrap_data(data)
        # Some deployments answer with only {"success": true}.
        if isinstance(record, dict) and "id" in record:
            return TrackingOrder.model_validate(record)
        return None


def build_tracking_params(query: TrackingOrderQuery) -> dict[str, Any]:
    params = query.to_payload()
    for key in ("status", "paymentType"):
        if params.get(key) in {"All", "all"}:
            params.pop(key)
    return params


def _raise_tracking_error(exc: ApiError) -> None:
    if isinstance(exc, (ValidationError, ConflictError)):
        message = _detail_message(exc)
        if message and _TERMINAL_STATE.search(message):
            raise OrderTrackingStateError(**exc.__dict__) from exc
    raise exc


def _detail_message(exc: ApiError) -> str | None:
    if isinstance(exc.details, dict):
        message = exc.details.get("message")
        if isinstance(message, str):
            return message.lower()
    if exc.message:
        return exc.message.lower()
    return None
