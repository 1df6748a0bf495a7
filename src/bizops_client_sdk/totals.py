from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Sequence

from .models_sales import RefundMode, SaleLine

_CENT = Decimal("0.01")
_ZERO = Decimal("0.00")
_HUNDRED = Decimal("100")


def to_money(value: Decimal | float | int | str | None) -> Decimal:
    if value is None or value == "":
        return _ZERO
    return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    final_total: Decimal


def line_total(line: SaleLine | Mapping[str, Any]) -> Decimal:
    if isinstance(line, SaleLine):
        return to_money(line.selling_price * line.quantity)
    price = Decimal(str(line.get("sellingPrice", line.get("selling_price", 0)) or 0))
    quantity = int(line.get("quantity", 0) or 0)
    return to_money(price * quantity)


def compute_invoice_totals(
    lines: Sequence[SaleLine | Mapping[str, Any]],
    *,
    discount: Decimal | float | str = 0,
    discount_type: str = "percentage",
    tax_rate: Decimal | float | str = 0,
) -> InvoiceTotals:
    """Subtotal, discount, tax and final total for an invoice draft.

    A percentage discount is taken from the subtotal; an amount discount is
    capped at the subtotal. Tax applies to the discounted subtotal.
    """
    subtotal = sum((line_total(line) for line in lines), _ZERO)
    discount_value = Decimal(str(discount or 0))
    if discount_value < 0:
        raise ValueError("discount must be >= 0")
    if discount_type == "percentage":
        discount_amount = to_money(subtotal * min(discount_value, _HUNDRED) / _HUNDRED)
    elif discount_type == "amount":
        discount_amount = to_money(min(discount_value, subtotal))
    else:
        raise ValueError(f"unsupported discount_type: {discount_type!r}")
    rate = Decimal(str(tax_rate or 0))
    if rate < 0:
        raise ValueError("tax_rate must be >= 0")
    taxable = subtotal - discount_amount
    tax_amount = to_money(taxable * rate / _HUNDRED)
    return InvoiceTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        final_total=to_money(taxable + tax_amount),
    )


def compute_refund_amount(
    *,
    selling_price: Decimal | float | str,
    quantity: int,
    mode: RefundMode | str = RefundMode.PERCENTAGE,
    value: Decimal | float | str = 100,
) -> Decimal:
    """Refund for one returned line, as a percentage of or a fixed amount off the line total."""
    total = to_money(Decimal(str(selling_price)) * quantity)
    amount = Decimal(str(value))
    if amount < 0:
        raise ValueError("refund value must be >= 0")
    if RefundMode(mode) is RefundMode.PERCENTAGE:
        return to_money(total * min(amount, _HUNDRED) / _HUNDRED)
    return to_money(min(amount, total))
