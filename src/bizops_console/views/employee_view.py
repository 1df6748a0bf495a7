from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bizops_client_sdk.models_employees import Employee
from bizops_client_sdk.permissions import permission_count

from ..table_state import ListQuery, ListViewConfig, field_getter
from .list_view import ListViewModel

EMPLOYEE_SEARCH_FIELDS = (
    "full_name",
    "first_name",
    "last_name",
    "email",
    "employee_code",
    "role",
    "position",
    "department",
)

EMPLOYEE_LIST_CONFIG = ListViewConfig(
    search_fields=EMPLOYEE_SEARCH_FIELDS,
    fields={
        "name": lambda employee: _full_name(employee),
        "full_name": lambda employee: _full_name(employee),
        "joining_date": field_getter("created_at"),
        "permission_count": lambda employee: permission_count(field_getter("permissions")(employee)),
    },
)

EMPLOYEE_STATUS_OPTIONS = ("All Status", "active", "inactive", "suspended")


def _full_name(employee: Any) -> str:
    if isinstance(employee, Employee):
        return employee.full_name
    first = field_getter("first_name")(employee) or ""
    last = field_getter("last_name")(employee) or ""
    return f"{first} {last}".strip()


@dataclass
class EmployeesListViewModel(ListViewModel[Employee]):
    layout: ListViewConfig = EMPLOYEE_LIST_CONFIG
    query: ListQuery = field(default_factory=lambda: ListQuery(status="All Status"))

    def row(self, employee: Employee) -> dict[str, Any]:
        joined = employee.joining_date.date().isoformat() if employee.joining_date else "-"
        return {
            "id": employee.id,
            "name": employee.full_name,
            "email": employee.email,
            "code": employee.employee_code,
            "role": employee.role or "-",
            "status": employee.status,
            "joined": joined,
            "permissions": permission_count(employee.permissions),
        }

    def selected_summary(self) -> dict[str, str | None]:
        employee = self.selected()
        if employee is None:
            return {"id": None, "summary": "No employee selected"}
        return {
            "id": employee.id,
            "summary": f"{employee.full_name} ({employee.employee_code or 'n/a'}) role={employee.role or 'n/a'}",
        }
