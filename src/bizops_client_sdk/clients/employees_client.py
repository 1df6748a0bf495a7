from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..exceptions import ApiError, ConflictError, EmployeeConflictError
from ..models_employees import (
    Employee,
    EmployeeCreateRequest,
    EmployeeInviteRequest,
    EmployeeListResponse,
    EmployeeQuery,
    EmployeeUpdateRequest,
    PermissionGrant,
)
from ..validation import (
    ClientValidationError,
    ValidationIssue,
    is_valid_email,
    validate_employee_payload,
    validate_employee_update,
    validate_permission_grants,
)
from .base import BaseClient, require_object, unwrap_list, unwrap_pagination

EMPLOYEES_CONTEXT = "employees.list"


@dataclass
class EmployeesClient(BaseClient):
    def list_employees(self, query: EmployeeQuery | None = None, *, context_version: int | None = None) -> EmployeeListResponse:
        query = query or EmployeeQuery()
        payload = self._request(
            "GET",
            "/employees",
            params=query.to_payload(),
            module="employees",
            operation="list",
            context_key=EMPLOYEES_CONTEXT,
            context_version=context_version,
        )
        rows = unwrap_list(payload, "employees")
        employees = [Employee.model_validate(row) for row in rows if isinstance(row, dict)]
        pagination = unwrap_pagination(payload, count=len(employees), page=query.page, limit=query.limit)
        return EmployeeListResponse(employees=employees, pagination=pagination)

    def get_employee(self, employee_id: str) -> Employee:
        data = self._request("GET", f"/employees/{employee_id}", module="employees", operation="get")
        return Employee.model_validate(require_object(data, "employee"))

    def create_employee(self, payload: EmployeeCreateRequest | Mapping[str, Any]) -> Employee:
        request = validate_employee_payload(payload)
        try:
            data = self._request(
                "POST",
                "/employees",
                json_body=request.to_payload(),
                module="employees",
                operation="create",
            )
        except ApiError as exc:
            _raise_employee_error(exc)
        return Employee.model_validate(require_object(data, "create employee"))

    def update_employee(self, employee_id: str, payload: EmployeeUpdateRequest | Mapping[str, Any]) -> Employee:
        request = validate_employee_update(payload)
        try:
            data = self._request(
                "PUT",
                f"/employees/{employee_id}",
                json_body=request.to_payload(),
                module="employees",
                operation="update",
            )
        except ApiError as exc:
            _raise_employee_error(exc)
        return Employee.model_validate(require_object(data, "update employee"))

    def delete_employee(self, employee_id: str) -> None:
        self._request("DELETE", f"/employees/{employee_id}", module="employees", operation="delete")

    def update_permissions(
        self,
        employee_id: str,
        permissions: Sequence[PermissionGrant | Mapping[str, Any]],
    ) -> Employee:
        grants = validate_permission_grants(list(permissions))
        data = self._request(
            "PUT",
            f"/employees/{employee_id}/permissions",
            json_body={"permissions": [grant.to_payload() for grant in grants]},
            module="employees",
            operation="update_permissions",
        )
        return Employee.model_validate(require_object(data, "update permissions"))

    def update_stores(self, employee_id: str, store_ids: Sequence[str]) -> Employee:
        data = self._request(
            "PUT",
            f"/employees/{employee_id}/stores",
            json_body={"storeIds": list(store_ids)},
            module="employees",
            operation="update_stores",
        )
        return Employee.model_validate(require_object(data, "update stores"))

    def deactivate_employee(self, employee_id: str) -> Employee:
        data = self._request("PUT", f"/employees/{employee_id}/deactivate", module="employees", operation="deactivate")
        return Employee.model_validate(require_object(data, "deactivate employee"))

    def reset_password(self, employee_id: str) -> dict[str, Any]:
        data = self._request(
            "POST",
            f"/employees/{employee_id}/reset-password",
            module="employees",
            operation="reset_password",
        )
        return data if isinstance(data, dict) else {}

    def invite_employee(self, payload: EmployeeInviteRequest | Mapping[str, Any]) -> dict[str, Any]:
        request = payload if isinstance(payload, EmployeeInviteRequest) else EmployeeInviteRequest.model_validate(payload)
        if not is_valid_email(request.email):
            raise ClientValidationError([ValidationIssue(None, "email", "email is not a valid address")])
        data = self._request(
            "POST",
            "/employees/invite",
            json_body=request.to_payload(),
            module="employees",
            operation="invite",
        )
        return data if isinstance(data, dict) else {}


def _raise_employee_error(exc: ApiError) -> None:
    if isinstance(exc, ConflictError):
        raise EmployeeConflictError(**exc.__dict__) from exc
    raise exc
