from __future__ import annotations

import json
from urllib.parse import parse_qs, urlparse

import pytest
import responses

from bizops_client_sdk.clients.employees_client import EmployeesClient
from bizops_client_sdk.exceptions import EmployeeConflictError, NotFoundError
from bizops_client_sdk.http_client import HttpClient
from bizops_client_sdk.models_employees import EmployeeQuery
from bizops_client_sdk.validation import ClientValidationError

BASE_URL = "https://api.example.com"


def _client(http: HttpClient) -> EmployeesClient:
    return EmployeesClient(http=http, access_token="token", store_id="store-1")


@responses.activate
def test_list_employees_sends_paging_and_store(http: HttpClient, employee_payload) -> None:
    responses.add(
        responses.GET,
        f"{BASE_URL}/employees",
        json={
            "data": {"employees": [employee_payload("e1", "Ann", "Lee")]},
            "pagination": {"page": 2, "limit": 5, "total": 6, "totalPages": 2},
        },
    )

    result = _client(http).list_employees(EmployeeQuery(store_id="store-1", page=2, limit=5))

    query = parse_qs(urlparse(responses.calls[0].request.url).query)
    assert query == {"storeId": ["store-1"], "page": ["2"], "limit": ["5"]}
    assert [employee.full_name for employee in result.employees] == ["Ann Lee"]
    assert result.pagination.total_pages == 2


@responses.activate
def test_create_employee_validates_before_sending(http: HttpClient) -> None:
    with pytest.raises(ClientValidationError):
        _client(http).create_employee({"first_name": "Ann", "last_name": "Lee", "email": "bad", "employee_code": "1"})
    assert len(responses.calls) == 0


@responses.activate
def test_create_employee_posts_canonical_permissions(http: HttpClient, employee_payload) -> None:
    def callback(request):
        body = json.loads(request.body)
        assert body["employeeCode"] == "654321"
        assert body["permissions"] == [{"resource": "sales", "actions": ["read"], "storeId": "store-1"}]
        return (201, {}, json.dumps({"data": employee_payload("e9", "Bob", "Stone")}))

    responses.add_callback(responses.POST, f"{BASE_URL}/employees", callback=callback)

    employee = _client(http).create_employee(
        {
            "employee_code": "654321",
            "first_name": "Bob",
            "last_name": "Stone",
            "email": "bob@example.com",
            "permissions": [{"resource": "sales", "action": "read", "scope": "store-1"}],
        }
    )
    assert employee.id == "e9"


@responses.activate
def test_create_employee_conflict_maps_to_domain_error(http: HttpClient) -> None:
    responses.add(responses.POST, f"{BASE_URL}/employees", status=409, json={"message": "Email already in use"})

    with pytest.raises(EmployeeConflictError) as exc_info:
        _client(http).create_employee(
            {"employee_code": "654321", "first_name": "Bob", "last_name": "Stone", "email": "bob@example.com"}
        )
    assert exc_info.value.message == "Email already in use"


@responses.activate
def test_update_permissions_puts_grant_list(http: HttpClient, employee_payload) -> None:
    responses.add(
        responses.PUT,
        f"{BASE_URL}/employees/e1/permissions",
        json={"data": employee_payload("e1", "Ann", "Lee", permissions=[{"resource": "sales", "actions": ["read"]}])},
    )

    employee = _client(http).update_permissions("e1", [{"resource": "sales", "actions": ["read"]}])

    assert json.loads(responses.calls[0].request.body) == {"permissions": [{"resource": "sales", "actions": ["read"]}]}
    assert employee.permissions[0].actions == ["read"]


@responses.activate
def test_delete_and_missing_employee(http: HttpClient) -> None:
    responses.add(responses.DELETE, f"{BASE_URL}/employees/e1", json={"success": True})
    responses.add(responses.GET, f"{BASE_URL}/employees/nope", status=404, json={"message": "Employee not found"})
    client = _client(http)

    client.delete_employee("e1")
    with pytest.raises(NotFoundError):
        client.get_employee("nope")


@responses.activate
def test_invite_requires_valid_email(http: HttpClient) -> None:
    with pytest.raises(ClientValidationError):
        _client(http).invite_employee({"email": "nobody"})
    assert len(responses.calls) == 0
