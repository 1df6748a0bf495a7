from __future__ import annotations

from decimal import Decimal

from bizops_client_sdk.models import TokenResponse
from bizops_client_sdk.models_employees import Employee, PermissionGrant
from bizops_client_sdk.models_order_tracking import TrackingOrder, UpdatePaymentRequest
from bizops_client_sdk.models_roles import RoleTemplate


def test_permission_grant_migrates_singular_action_string() -> None:
    grant = PermissionGrant.model_validate({"resource": "sales", "action": "read", "scope": "store-1"})
    assert grant.actions == ["read"]
    assert grant.store_id == "store-1"
    assert grant.to_payload() == {"resource": "sales", "actions": ["read"], "storeId": "store-1"}


def test_permission_grant_migrates_singular_action_list() -> None:
    grant = PermissionGrant.model_validate({"resource": "sales", "action": ["read", "write"]})
    assert grant.actions == ["read", "write"]
    assert grant.store_id is None


def test_permission_grant_null_actions_become_empty() -> None:
    assert PermissionGrant.model_validate({"resource": "sales", "actions": None}).actions == []


def test_employee_coerces_malformed_collections() -> None:
    employee = Employee.model_validate(
        {"id": "e1", "firstName": "Ann", "lastName": "Lee", "permissions": "all", "storeIds": None}
    )
    assert employee.permissions == []
    assert employee.store_ids == []
    assert employee.full_name == "Ann Lee"


def test_employee_drops_grants_without_resource() -> None:
    employee = Employee.model_validate(
        {"id": "e1", "permissions": [None, "sales", {"actions": ["read"]}, {"resource": "stock", "actions": ["read", None]}]}
    )
    assert [(grant.resource, grant.actions) for grant in employee.permissions] == [("stock", ["read"])]


def test_role_template_drops_unreadable_grants() -> None:
    template = RoleTemplate.model_validate({"id": "r1", "name": "Cashier", "permissions": [{"resource": 7}, {"resource": "sales"}]})
    assert [grant.resource for grant in template.permissions] == ["sales"]


def test_role_template_status_follows_active_flag() -> None:
    template = RoleTemplate.model_validate({"id": "r1", "name": "Cashier", "isActive": False, "permissions": None})
    assert template.status == "Inactive"
    assert template.permissions == []


def test_tracking_order_normalizes_legacy_status() -> None:
    order = TrackingOrder.model_validate({"id": "o1", "status": "PENDING_VALIDATION", "paymentAmount": 10})
    assert order.status == "pending_verification"
    assert order.payment_amount == Decimal("10")


def test_tracking_order_payment_adjusted() -> None:
    order = TrackingOrder.model_validate({"id": "o1", "paymentAmount": 90, "originalPaymentAmount": 100})
    assert order.payment_adjusted is True


def test_money_serializes_as_json_number() -> None:
    payload = UpdatePaymentRequest(payment_amount=Decimal("12.50")).to_payload()
    assert payload == {"paymentAmount": 12.5}


def test_token_response_accepts_access_token_envelope() -> None:
    token = TokenResponse.from_payload({"data": {"accessToken": "abc", "user": {"id": "u1", "storeIds": ["s1"]}}})
    assert token.token == "abc"
    assert token.user is not None
    assert token.user.store_ids == ["s1"]
