from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping

from pydantic import Field, model_validator

from .models import ApiModel, PaginationMeta


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"


class PermissionGrant(ApiModel):
    """One (resource, actions, store) grant.

    Role templates were historically stored with a singular ``action`` (a
    string or a list) and a ``scope`` in place of ``storeId``; both legacy
    shapes are folded into the plural form on parse so every consumer deals
    with a single schema.
    """

    resource: str
    actions: List[str] = Field(default_factory=list)
    store_id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_legacy_shape(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        migrated = dict(data)
        if "actions" not in migrated and "action" in migrated:
            legacy = migrated.pop("action")
            if isinstance(legacy, str):
                migrated["actions"] = [legacy] if legacy else []
            elif isinstance(legacy, (list, tuple, set)):
                migrated["actions"] = [str(item) for item in legacy]
            else:
                migrated["actions"] = []
        actions = migrated.get("actions")
        if isinstance(actions, (list, tuple, set)):
            migrated["actions"] = [str(item) for item in actions if item is not None]
        else:
            migrated["actions"] = []
        if "storeId" not in migrated and "store_id" not in migrated and "scope" in migrated:
            migrated["storeId"] = migrated.pop("scope")
        return migrated

    @property
    def key(self) -> tuple[str, str | None]:
        return (self.resource, self.store_id)


def usable_grants(value: Any) -> list[Any]:
    """Entries of ``value`` that can be read as a grant: grants, or mappings naming a resource."""
    if not isinstance(value, list):
        return []
    return [
        entry
        for entry in value
        if isinstance(entry, PermissionGrant)
        or (isinstance(entry, Mapping) and isinstance(entry.get("resource"), str) and entry.get("resource"))
    ]


class Employee(ApiModel):
    id: str | None = None
    employee_code: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    role: str = ""
    position: str = ""
    department: str = ""
    status: str = EmployeeStatus.ACTIVE.value
    created_at: datetime | None = None
    permissions: List[PermissionGrant] = Field(default_factory=list)
    store_ids: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _coerce_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        if "permissions" in cleaned:
            cleaned["permissions"] = usable_grants(cleaned["permissions"])
        for key in ("storeIds", "store_ids"):
            if key in cleaned and not isinstance(cleaned[key], list):
                cleaned[key] = []
        return cleaned

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def joining_date(self) -> datetime | None:
        return self.created_at


class EmployeeCreateRequest(ApiModel):
    employee_code: str
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    role: str = ""
    position: str = ""
    department: str = ""
    status: str = EmployeeStatus.ACTIVE.value
    password: str | None = None
    permissions: List[PermissionGrant] = Field(default_factory=list)
    store_ids: List[str] = Field(default_factory=list)


class EmployeeUpdateRequest(ApiModel):
    employee_code: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    position: str | None = None
    department: str | None = None
    status: str | None = None
    password: str | None = None
    permissions: List[PermissionGrant] | None = None
    store_ids: List[str] | None = None


class EmployeeInviteRequest(ApiModel):
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    store_ids: List[str] = Field(default_factory=list)


class EmployeeQuery(ApiModel):
    store_id: str | None = None
    page: int = 1
    limit: int = 10
    email: str | None = None


class EmployeeListResponse(ApiModel):
    employees: List[Employee] = Field(default_factory=list)
    pagination: PaginationMeta = Field(default_factory=PaginationMeta)
