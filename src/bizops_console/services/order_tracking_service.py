from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Mapping

from bizops_client_sdk.clients.order_tracking_client import ORDER_TRACKING_CONTEXT
from bizops_client_sdk.models_order_tracking import (
    TrackingOrder,
    TrackingOrderListResponse,
    TrackingOrderQuery,
    TrackingStatus,
)
from bizops_client_sdk.order_tracking_state import TrackingActionAvailability, tracking_action_availability
from bizops_client_sdk.totals import to_money
from bizops_client_sdk.validation import validate_payment_amount

from ..stores import CollectionState
from .base import ServiceBase, ServiceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackingStats:
    total: int
    pending: int
    under_review: int
    verified: int
    rejected: int
    verified_amount: Decimal


def tracking_stats(orders: Iterable[TrackingOrder]) -> TrackingStats:
    """Dashboard counters for a tracking list.

    ``pending`` is every order still awaiting a decision, under review
    included; ``under_review`` is the subset of those in review. ``rejected``
    follows the status alone.
    """
    total = pending = under_review = verified = rejected = 0
    verified_amount = Decimal("0")
    for order in orders:
        total += 1
        is_verified = order.is_verified or order.status == TrackingStatus.VERIFIED.value
        if order.status == TrackingStatus.REJECTED.value:
            rejected += 1
        elif not is_verified:
            pending += 1
            if order.status == TrackingStatus.UNDER_REVIEW.value:
                under_review += 1
        if is_verified:
            verified += 1
            verified_amount += order.payment_amount
    return TrackingStats(
        total=total,
        pending=pending,
        under_review=under_review,
        verified=verified,
        rejected=rejected,
        verified_amount=to_money(verified_amount),
    )


@dataclass
class _LastQuery:
    page: int = 1
    limit: int | None = None
    status: str | None = None
    payment_type: str | None = None
    search: str | None = None


class OrderTrackingService(ServiceBase):
    """Verification workflow for delivered orders.

    Every successful transition re-reads the store's tracking list instead
    of patching the local copy.
    """

    module = "order_tracking"

    def __init__(
        self,
        *args: Any,
        state: CollectionState[TrackingOrder] | None = None,
        can_manage: bool = True,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[TrackingOrder] = state or CollectionState()
        self.can_manage = can_manage
        self._last_query = _LastQuery()

    def fetch_orders(
        self,
        *,
        page: int = 1,
        limit: int | None = None,
        status: str | None = None,
        payment_type: str | None = None,
        search: str | None = None,
    ) -> TrackingOrderListResponse | None:
        self._last_query = _LastQuery(page, limit, status, payment_type, search)
        limit = limit or self.session.config.default_page_size

        def _call(version: int) -> TrackingOrderListResponse:
            query = TrackingOrderQuery(
                store_id=self.store.require(),
                page=page,
                limit=limit,
                status=status,
                payment_type=payment_type,
                search=search,
            )
            return self.session.order_tracking_client().list_orders(query, context_version=version)

        result = self._fetch(self.state, "fetch", "Failed to fetch tracking orders", ORDER_TRACKING_CONTEXT, _call)
        if result is not None:
            self.state.succeed(result.orders, result.pagination)
        return result

    def refresh(self) -> TrackingOrderListResponse | None:
        last = self._last_query
        return self.fetch_orders(
            page=last.page,
            limit=last.limit,
            status=last.status,
            payment_type=last.payment_type,
            search=last.search,
        )

    def _resync(self) -> TrackingOrderListResponse | None:
        """Re-read the list after an accepted transition.

        A failed re-read stays in ``state.error``; the transition itself already succeeded.
        """
        try:
            return self.refresh()
        except ServiceError as exc:
            logger.warning("tracking_orders_refresh_failed", extra={"error_code": exc.code, "trace_id": exc.trace_id})
            return None

    def availability(self, order: TrackingOrder | Mapping[str, Any]) -> TrackingActionAvailability:
        return tracking_action_availability(order, can_manage=self.can_manage)

    def add_to_tracking(self, payload: Mapping[str, Any]) -> TrackingOrder:
        def _call() -> TrackingOrder:
            data = dict(payload)
            if not data.get("storeId") and not data.get("store_id"):
                data["store_id"] = self.store.require()
            return self.session.order_tracking_client().add_to_tracking(data)

        order = self._mutate(self.state, "create", "Failed to add order to tracking", _call)
        self._resync()
        return order

    def verify(
        self,
        order: TrackingOrder,
        *,
        payment_amount: Decimal | float | str | None = None,
        verification_notes: str | None = None,
    ) -> TrackingOrderListResponse | None:
        """Verify ``order``, first saving an edited payment amount if it changed."""

        def _call() -> None:
            amount = validate_payment_amount(payment_amount) if payment_amount is not None else None
            client = self.session.order_tracking_client()
            if amount is not None and amount != order.payment_amount:
                logger.info("tracking_order_payment_adjusted", extra={"order_id": order.id})
                client.update_payment(order.id, {"payment_amount": amount})
            client.verify_order(order.id, payment_amount=amount, verification_notes=verification_notes)

        self._mutate(self.state, "verify", "Failed to verify order", _call)
        return self._resync()

    def reject(self, order: TrackingOrder, reason: str) -> TrackingOrderListResponse | None:
        self._mutate(
            self.state,
            "reject",
            "Failed to reject order",
            lambda: self.session.order_tracking_client().reject_order(order.id, {"rejection_reason": reason}),
        )
        return self._resync()

    def update_payment(self, order: TrackingOrder, amount: Decimal | float | str) -> TrackingOrderListResponse | None:
        self._mutate(
            self.state,
            "update_payment",
            "Failed to update payment amount",
            lambda: self.session.order_tracking_client().update_payment(order.id, {"payment_amount": amount}),
        )
        return self._resync()

    def stats(self) -> TrackingStats:
        return tracking_stats(self.state.items)
