from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from bizops_client_sdk.models_roles import RoleTemplate
from bizops_client_sdk.permissions import permission_count

from ..table_state import ListQuery, ListViewConfig, field_getter
from .list_view import ListViewModel

ROLE_TEMPLATE_LIST_CONFIG = ListViewConfig(
    search_fields=("name", "description"),
    fields={
        "permission_count": lambda template: permission_count(field_getter("permissions")(template)),
    },
)

ROLE_TEMPLATE_STATUS_OPTIONS = ("All Status", "Active", "Inactive")


@dataclass
class RoleTemplatesListViewModel(ListViewModel[RoleTemplate]):
    layout: ListViewConfig = ROLE_TEMPLATE_LIST_CONFIG
    query: ListQuery = field(default_factory=lambda: ListQuery(status="All Status"))

    def row(self, template: RoleTemplate) -> dict[str, Any]:
        return {
            "id": template.id,
            "name": template.name,
            "description": template.description or "",
            "permissions": permission_count(template.permissions),
            "status": template.status,
            "default": template.is_default,
        }
