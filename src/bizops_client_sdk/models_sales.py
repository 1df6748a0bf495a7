from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import List

from pydantic import Field

from .models import ApiModel, Money


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    DIGITAL = "DIGITAL"


class SaleStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    REFUNDED = "REFUNDED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


class ReturnCategory(str, Enum):
    SALEABLE = "SALEABLE"
    NON_SALEABLE = "NON_SALEABLE"
    SCRAP = "SCRAP"


class RefundMode(str, Enum):
    PERCENTAGE = "percentage"
    AMOUNT = "amount"


class SaleCustomer(ApiModel):
    id: str | None = None
    customer_name: str = ""
    customer_address: str | None = None
    phone_number: str | None = None
    telephone_number: str | None = None
    customer_mail: str | None = None
    store_id: str | None = None
    client_id: str | None = None


class SaleLine(ApiModel):
    id: str | None = None
    sale_id: str | None = None
    product_id: str
    product_name: str = ""
    plu_upc: str = ""
    quantity: int = 1
    selling_price: Money = Decimal("0")
    total_price: Money = Decimal("0")


class Sale(ApiModel):
    id: str
    customer_id: str | None = None
    user_id: str | None = None
    store_id: str | None = None
    client_id: str | None = None
    payment_method: str | None = None
    total_amount: Money = Decimal("0")
    tax: Money = Decimal("0")
    status: str = SaleStatus.PENDING.value
    generate_invoice: bool = False
    cashier_name: str | None = None
    source: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    customer: SaleCustomer | None = None
    sale_items: List[SaleLine] = Field(default_factory=list)


class SaleCreateRequest(ApiModel):
    customer_phone: str
    customer_data: SaleCustomer
    store_id: str
    client_id: str | None = None
    payment_method: str
    total_amount: Money
    tax: Money = Decimal("0")
    cashier_name: str = ""
    generate_invoice: bool = False
    source: str = "manual"
    sale_items: List[SaleLine]


class SaleUpdateRequest(ApiModel):
    status: str | None = None
    payment_method: str | None = None
    total_amount: Money | None = None
    tax: Money | None = None
    cashier_name: str | None = None
    sale_items: List[SaleLine] | None = None


class SaleQuery(ApiModel):
    store_id: str
    page: int = 1
    limit: int = 20
    customer_id: str | None = None
    status: str | None = None
    payment_method: str | None = None
    date_from: date | str | None = None
    date_to: date | str | None = None


class ReturnLineRequest(ApiModel):
    product_id: str
    plu_upc: str = ""
    is_product_returned: bool = True
    quantity: int
    refund_amount: Money
    return_category: str = ReturnCategory.SALEABLE.value
    reason: str = ""


class ReturnCreateRequest(ApiModel):
    sale_id: str
    return_items: List[ReturnLineRequest]


class ReturnRecord(ApiModel):
    id: str
    sale_id: str
    product_id: str
    plu_upc: str = ""
    quantity: int = 0
    refund_amount: Money | None = None
    return_category: str = ReturnCategory.NON_SALEABLE.value
    reason: str = ""
    processed_by: str | None = None
    created_at: datetime | None = None
    sale: Sale | None = None


class Invoice(ApiModel):
    id: str
    sale_id: str | None = None
    invoice_number: str = ""
    customer_name: str = ""
    customer_phone: str | None = None
    business_name: str | None = None
    payment_method: str | None = None
    total_amount: Money = Decimal("0")
    net_amount: Money | None = None
    tax: Money = Decimal("0")
    status: str = SaleStatus.PENDING.value
    cashier_name: str | None = None
    created_at: datetime | None = None


class BusinessProfile(ApiModel):
    business_name: str
    contact_no: str = ""
    website: str = ""
    address: str = ""
    logo_url: str | None = None
