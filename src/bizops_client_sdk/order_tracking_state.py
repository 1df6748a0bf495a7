from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .models_order_tracking import TrackingOrder, TrackingStatus, normalize_tracking_status


@dataclass(frozen=True)
class TrackingActionAvailability:
    can_verify: bool
    can_reject: bool
    can_edit_payment: bool


def _status_and_flag(order: TrackingOrder | Mapping[str, Any]) -> tuple[str, bool]:
    if isinstance(order, TrackingOrder):
        return order.status, order.is_verified
    status = order.get("status")
    verified = order.get("isVerified", order.get("is_verified", False))
    return normalize_tracking_status(status if isinstance(status, str) else None), bool(verified)


def is_terminal(order: TrackingOrder | Mapping[str, Any]) -> bool:
    status, verified = _status_and_flag(order)
    return verified or status in {TrackingStatus.VERIFIED.value, TrackingStatus.REJECTED.value}


def tracking_action_availability(
    order: TrackingOrder | Mapping[str, Any],
    *,
    can_manage: bool = True,
) -> TrackingActionAvailability:
    status, verified = _status_and_flag(order)
    if not can_manage:
        return TrackingActionAvailability(False, False, False)
    open_for_review = not verified and status != TrackingStatus.REJECTED.value
    return TrackingActionAvailability(
        can_verify=open_for_review,
        can_reject=open_for_review,
        can_edit_payment=open_for_review,
    )
