from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, TypeVar
from urllib.parse import urlparse

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .models_employees import EmployeeCreateRequest, EmployeeUpdateRequest, PermissionGrant
from .models_order_tracking import RejectOrderRequest, UpdatePaymentRequest
from .models_roles import RoleTemplateRequest
from .models_sales import BusinessProfile, ReturnCreateRequest, SaleCreateRequest
from .permissions import coerce_grants

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_EMPLOYEE_CODE_RE = re.compile(r"^\d{6}$")
_PHONE_RE = re.compile(r"^\+?[0-9][0-9\s\-()]{5,}$")
M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationIssue:
    row_index: int | None
    field: str
    reason: str


class ClientValidationError(ValueError):
    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.issues:
            return "Validation failed"
        issue = self.issues[0]
        location = f"row {issue.row_index}" if issue.row_index is not None else "payload"
        return f"{location} {issue.field}: {issue.reason}"

    def field_messages(self) -> dict[str, str]:
        messages: dict[str, str] = {}
        for issue in self.issues:
            messages.setdefault(issue.field, issue.reason)
        return messages


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(_EMAIL_RE.match(value.strip()))


def is_valid_url(value: str | None) -> bool:
    """Empty is allowed; otherwise the value needs an http(s) scheme and a host."""
    if not value:
        return True
    parsed = urlparse(value.strip())
    return parsed.scheme in {"http", "https"} and bool(parsed.netloc)


def validate_employee_payload(
    payload: EmployeeCreateRequest | Mapping[str, Any],
    *,
    require_password: bool = False,
) -> EmployeeCreateRequest:
    data = _coerce_model(payload, EmployeeCreateRequest)
    issues: list[ValidationIssue] = []
    for field in ("first_name", "last_name", "email"):
        if not str(getattr(data, field) or "").strip():
            issues.append(ValidationIssue(None, field, f"{field} is required"))
    if data.email and not is_valid_email(data.email):
        issues.append(ValidationIssue(None, "email", "email is not a valid address"))
    if not _EMPLOYEE_CODE_RE.match(data.employee_code or ""):
        issues.append(ValidationIssue(None, "employee_code", "employee_code must be exactly 6 digits"))
    if data.phone and not _PHONE_RE.match(data.phone.strip()):
        issues.append(ValidationIssue(None, "phone", "phone is not a valid number"))
    if require_password and not data.password:
        issues.append(ValidationIssue(None, "password", "password is required"))
    issues.extend(_grant_issues(data.permissions))
    _raise_if(issues)
    return data


def validate_employee_update(payload: EmployeeUpdateRequest | Mapping[str, Any]) -> EmployeeUpdateRequest:
    data = _coerce_model(payload, EmployeeUpdateRequest)
    issues: list[ValidationIssue] = []
    if data.email is not None and not is_valid_email(data.email):
        issues.append(ValidationIssue(None, "email", "email is not a valid address"))
    if data.employee_code is not None and not _EMPLOYEE_CODE_RE.match(data.employee_code):
        issues.append(ValidationIssue(None, "employee_code", "employee_code must be exactly 6 digits"))
    if data.permissions is not None:
        issues.extend(_grant_issues(data.permissions))
    _raise_if(issues)
    return data


def validate_permission_grants(permissions: Any) -> list[PermissionGrant]:
    grants = coerce_grants(permissions)
    _raise_if(_grant_issues(grants))
    return grants


def validate_role_template_payload(payload: RoleTemplateRequest | Mapping[str, Any]) -> RoleTemplateRequest:
    data = _coerce_model(payload, RoleTemplateRequest)
    issues: list[ValidationIssue] = []
    if not data.name.strip():
        issues.append(ValidationIssue(None, "name", "name is required"))
    if not data.permissions:
        issues.append(ValidationIssue(None, "permissions", "at least one permission is required"))
    for idx, grant in enumerate(data.permissions):
        if not grant.resource.strip():
            issues.append(ValidationIssue(idx, "resource", "resource is required"))
    if data.priority is not None and data.priority < 0:
        issues.append(ValidationIssue(None, "priority", "priority must be >= 0"))
    _raise_if(issues)
    return data


def validate_business_profile(payload: BusinessProfile | Mapping[str, Any]) -> BusinessProfile:
    data = _coerce_model(payload, BusinessProfile)
    issues: list[ValidationIssue] = []
    if not data.business_name.strip():
        issues.append(ValidationIssue(None, "business_name", "business_name is required"))
    if not is_valid_url(data.website):
        issues.append(ValidationIssue(None, "website", "website must be a valid http(s) URL"))
    if data.logo_url and not is_valid_url(data.logo_url):
        issues.append(ValidationIssue(None, "logo_url", "logo_url must be a valid http(s) URL"))
    _raise_if(issues)
    return data


def validate_sale_payload(payload: SaleCreateRequest | Mapping[str, Any]) -> SaleCreateRequest:
    data = _coerce_model(payload, SaleCreateRequest)
    issues: list[ValidationIssue] = []
    if not data.customer_phone.strip():
        issues.append(ValidationIssue(None, "customer_phone", "customer_phone is required"))
    if not data.customer_data.customer_name.strip():
        issues.append(ValidationIssue(None, "customer_name", "customer_name is required"))
    if data.customer_data.customer_mail and not is_valid_email(data.customer_data.customer_mail):
        issues.append(ValidationIssue(None, "customer_mail", "customer_mail is not a valid address"))
    if not data.sale_items:
        issues.append(ValidationIssue(None, "sale_items", "sale_items must not be empty"))
    for idx, line in enumerate(data.sale_items):
        if line.quantity < 1:
            issues.append(ValidationIssue(idx, "quantity", "quantity must be at least 1"))
        if line.selling_price < 0:
            issues.append(ValidationIssue(idx, "selling_price", "selling_price must be >= 0"))
    if data.total_amount < 0:
        issues.append(ValidationIssue(None, "total_amount", "total_amount must be >= 0"))
    _raise_if(issues)
    return data


def validate_return_payload(
    payload: ReturnCreateRequest | Mapping[str, Any],
    *,
    available_quantities: Mapping[str, int] | None = None,
) -> ReturnCreateRequest:
    data = _coerce_model(payload, ReturnCreateRequest)
    issues: list[ValidationIssue] = []
    if not data.sale_id:
        issues.append(ValidationIssue(None, "sale_id", "sale_id is required"))
    if not data.return_items:
        issues.append(ValidationIssue(None, "return_items", "return_items must not be empty"))
    for idx, item in enumerate(data.return_items):
        if item.quantity < 1:
            issues.append(ValidationIssue(idx, "quantity", "quantity must be at least 1"))
        if available_quantities is not None:
            available = available_quantities.get(item.product_id)
            if available is not None and item.quantity > available:
                issues.append(ValidationIssue(idx, "quantity", f"quantity cannot exceed {available}"))
        if item.refund_amount < 0:
            issues.append(ValidationIssue(idx, "refund_amount", "refund_amount must be >= 0"))
        if not item.reason.strip():
            issues.append(ValidationIssue(idx, "reason", "reason is required"))
    _raise_if(issues)
    return data


def validate_payment_amount(value: Decimal | float | int | str) -> Decimal:
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ClientValidationError([ValidationIssue(None, "payment_amount", "payment_amount must be a number")]) from exc
    if not amount.is_finite() or amount <= 0:
        _raise_if([ValidationIssue(None, "payment_amount", "payment_amount must be greater than 0")])
    return amount


def validate_update_payment_payload(payload: UpdatePaymentRequest | Mapping[str, Any]) -> UpdatePaymentRequest:
    data = _coerce_model(payload, UpdatePaymentRequest)
    validate_payment_amount(data.payment_amount)
    return data


def validate_reject_payload(payload: RejectOrderRequest | Mapping[str, Any]) -> RejectOrderRequest:
    data = _coerce_model(payload, RejectOrderRequest)
    if not data.rejection_reason.strip():
        _raise_if([ValidationIssue(None, "rejection_reason", "rejection_reason is required")])
    return data


def _grant_issues(grants: list[PermissionGrant]) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []
    for idx, grant in enumerate(grants):
        if not grant.resource.strip():
            issues.append(ValidationIssue(idx, "resource", "resource is required"))
        if not grant.actions:
            issues.append(ValidationIssue(idx, "actions", "at least one action is required"))
    return issues


def _coerce_model(payload: M | Mapping[str, Any], model_type: type[M]) -> M:
    if isinstance(payload, model_type):
        return payload
    try:
        return model_type.model_validate(payload)
    except PydanticValidationError as exc:
        issues = [
            ValidationIssue(
                row_index=None,
                field=".".join(str(part) for part in error.get("loc", ("payload",))),
                reason=error.get("msg", "Invalid value"),
            )
            for error in exc.errors()
        ]
        raise ClientValidationError(issues or [ValidationIssue(None, "payload", "Invalid payload")]) from exc


def _raise_if(issues: list[ValidationIssue]) -> None:
    if issues:
        raise ClientValidationError(issues)
