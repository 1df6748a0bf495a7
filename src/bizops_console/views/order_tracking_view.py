from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bizops_client_sdk.models_order_tracking import TrackingOrder
from bizops_client_sdk.order_tracking_state import tracking_action_availability

from ..table_state import ListQuery, ListViewConfig, field_getter
from .list_view import ListViewModel

VERIFIED = "verified"
UNVERIFIED = "unverified"

TRACKING_LIST_CONFIG = ListViewConfig(
    search_fields=("customer_name", "driver_name", "id"),
    fields={
        "verification": lambda order: VERIFIED if field_getter("is_verified")(order) else UNVERIFIED,
    },
    filter_fields=("payment_type", "verification"),
)

TRACKING_STATUS_OPTIONS = ("All", "pending_verification", "under_review", "verified", "rejected")


@dataclass
class TrackingOrdersListViewModel(ListViewModel[TrackingOrder]):
    layout: ListViewConfig = TRACKING_LIST_CONFIG
    query: ListQuery = field(default_factory=lambda: ListQuery(status="All", sort_field="created_at"))
    can_manage: bool = True

    def row(self, order: TrackingOrder) -> dict[str, Any]:
        actions = tracking_action_availability(order, can_manage=self.can_manage)
        return {
            "id": order.id,
            "customer": order.customer_name,
            "driver": order.driver_name or "-",
            "amount": f"{order.payment_amount:.2f}",
            "adjusted": order.payment_adjusted,
            "payment_type": order.payment_type or "-",
            "status": order.status,
            "verified": order.is_verified,
            "can_verify": actions.can_verify,
            "can_reject": actions.can_reject,
            "can_edit_payment": actions.can_edit_payment,
        }
