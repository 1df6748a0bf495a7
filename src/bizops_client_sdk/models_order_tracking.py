from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List

from pydantic import Field, field_validator

from .models import ApiModel, Money, PaginationMeta


class TrackingStatus(str, Enum):
    PENDING_VERIFICATION = "pending_verification"
    UNDER_REVIEW = "under_review"
    VERIFIED = "verified"
    REJECTED = "rejected"


TRACKING_STATUS_ALIASES = {"pending_validation": TrackingStatus.PENDING_VERIFICATION.value}
TERMINAL_TRACKING_STATUSES = {TrackingStatus.VERIFIED.value, TrackingStatus.REJECTED.value}


def normalize_tracking_status(value: str | None) -> str:
    raw = (value or "").strip().lower()
    return TRACKING_STATUS_ALIASES.get(raw, raw)


class PaymentType(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    BANK_TRANSFER = "BANK_TRANSFER"
    CHECK = "CHECK"
    DIGITAL_WALLET = "DIGITAL_WALLET"


class TrackingOrder(ApiModel):
    id: str
    customer_id: str | None = None
    customer_name: str = ""
    status: str = TrackingStatus.PENDING_VERIFICATION.value
    payment_amount: Money = Decimal("0")
    original_payment_amount: Money | None = None
    payment_type: str | None = None
    driver_name: str = ""
    is_verified: bool = False
    verified_at: datetime | None = None
    verified_by: str | None = None
    rejection_reason: str | None = None
    validated_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    store_id: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_status(cls, value: Any) -> str:
        return normalize_tracking_status(value if isinstance(value, str) else None) or (
            TrackingStatus.PENDING_VERIFICATION.value
        )

    @property
    def payment_adjusted(self) -> bool:
        if self.original_payment_amount is None:
            return False
        return self.payment_amount != self.original_payment_amount


class TrackingOrderQuery(ApiModel):
    store_id: str
    page: int = 1
    limit: int = 10
    status: str | None = None
    payment_type: str | None = None
    search: str | None = None


class TrackingOrderCreateRequest(ApiModel):
    sale_id: str | None = None
    customer_id: str | None = None
    customer_name: str
    payment_amount: Money
    payment_type: str
    driver_name: str = ""
    store_id: str


class VerifyOrderRequest(ApiModel):
    payment_amount: Money | None = None
    verification_notes: str | None = None
    store_id: str | None = None


class RejectOrderRequest(ApiModel):
    rejection_reason: str
    store_id: str | None = None


class UpdatePaymentRequest(ApiModel):
    payment_amount: Money
    store_id: str | None = None


class TrackingOrderListResponse(ApiModel):
    orders: List[TrackingOrder] = Field(default_factory=list)
    pagination: PaginationMeta = Field(default_factory=PaginationMeta)
