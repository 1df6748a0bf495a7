from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from bizops_client_sdk.clients.employees_client import EMPLOYEES_CONTEXT
from bizops_client_sdk.models_employees import Employee, EmployeeListResponse, EmployeeQuery, PermissionGrant
from bizops_client_sdk.permissions import toggle_action

from ..stores import CollectionState
from .base import ServiceBase, ServiceError

logger = logging.getLogger(__name__)


class EmployeesService(ServiceBase):
    module = "employees"

    def __init__(self, *args: Any, state: CollectionState[Employee] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[Employee] = state or CollectionState()

    def fetch_employees(self, *, page: int = 1, limit: int | None = None) -> EmployeeListResponse | None:
        limit = limit or self.session.config.default_page_size
        logger.info("employees_fetch_attempt", extra={"page": page, "limit": limit})

        def _call(version: int) -> EmployeeListResponse:
            query = EmployeeQuery(store_id=self.store.require(), page=page, limit=limit)
            return self.session.employees_client().list_employees(query, context_version=version)

        result = self._fetch(self.state, "fetch", "Failed to fetch employees", EMPLOYEES_CONTEXT, _call)
        if result is not None:
            self.state.succeed(result.employees, result.pagination)
        return result

    def get_employee(self, employee_id: str) -> Employee:
        return self._mutate(
            self.state,
            "get",
            "Failed to fetch employee",
            lambda: self.session.employees_client().get_employee(employee_id),
            self._upsert,
        )

    def create_employee(self, payload: Mapping[str, Any]) -> Employee:
        data = self._with_current_store(payload)
        return self._mutate(
            self.state,
            "create",
            "Failed to create employee",
            lambda: self.session.employees_client().create_employee(data),
            self.state.append,
        )

    def update_employee(self, employee_id: str, payload: Mapping[str, Any]) -> Employee:
        return self._mutate(
            self.state,
            "update",
            "Failed to update employee",
            lambda: self.session.employees_client().update_employee(employee_id, payload),
            self._upsert,
        )

    def delete_employee(self, employee_id: str) -> None:
        self._mutate(
            self.state,
            "delete",
            "Failed to delete employee",
            lambda: self.session.employees_client().delete_employee(employee_id),
            lambda _: self.state.remove(employee_id),
        )

    def update_permissions(self, employee_id: str, permissions: Sequence[PermissionGrant | Mapping[str, Any]]) -> Employee:
        return self._mutate(
            self.state,
            "update_permissions",
            "Failed to update permissions",
            lambda: self.session.employees_client().update_permissions(employee_id, permissions),
            self._upsert,
        )

    def toggle_permission(self, employee_id: str, *, resource: str, action: str) -> Employee:
        """Flip one action for the current store and save the employee's grants."""
        employee = self.state.find(employee_id)
        if employee is None:
            raise ServiceError(message="Employee not found", code="NOT_FOUND")
        grants = toggle_action(employee.permissions, resource=resource, action=action, store_id=self.store.store_id)
        return self.update_permissions(employee_id, grants)

    def update_stores(self, employee_id: str, store_ids: Sequence[str]) -> Employee:
        return self._mutate(
            self.state,
            "update_stores",
            "Failed to update employee stores",
            lambda: self.session.employees_client().update_stores(employee_id, store_ids),
            self._upsert,
        )

    def deactivate_employee(self, employee_id: str) -> Employee:
        return self._mutate(
            self.state,
            "deactivate",
            "Failed to deactivate employee",
            lambda: self.session.employees_client().deactivate_employee(employee_id),
            self._upsert,
        )

    def reset_password(self, employee_id: str) -> dict[str, Any]:
        return self._mutate(
            self.state,
            "reset_password",
            "Failed to reset password",
            lambda: self.session.employees_client().reset_password(employee_id),
        )

    def invite_employee(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        data = self._with_current_store(payload)
        return self._mutate(
            self.state,
            "invite",
            "Failed to send invitation",
            lambda: self.session.employees_client().invite_employee(data),
        )

    def _upsert(self, employee: Employee) -> None:
        if not self.state.replace(employee):
            self.state.append(employee)

    def _with_current_store(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        data = dict(payload)
        if not data.get("storeIds") and not data.get("store_ids") and self.store.store_id:
            data["store_ids"] = [self.store.store_id]
        return data
