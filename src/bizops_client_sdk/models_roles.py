from __future__ import annotations

from datetime import datetime
from typing import Any, List

from pydantic import Field, model_validator

from .models import ApiModel, PaginationMeta
from .models_employees import PermissionGrant, usable_grants


class RoleTemplate(ApiModel):
    id: str
    name: str
    description: str = ""
    permissions: List[PermissionGrant] = Field(default_factory=list)
    inherits_from: str | None = None
    is_default: bool = False
    is_active: bool = True
    priority: int = 0
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _coerce_permissions(cls, data: Any) -> Any:
        if isinstance(data, dict) and "permissions" in data:
            return {**data, "permissions": usable_grants(data["permissions"])}
        return data

    @property
    def status(self) -> str:
        return "Active" if self.is_active else "Inactive"


class RoleTemplateRequest(ApiModel):
    name: str
    description: str = ""
    permissions: List[PermissionGrant] = Field(default_factory=list)
    inherits_from: str | None = None
    is_default: bool | None = None
    priority: int | None = None
    is_active: bool | None = None


class RoleAssignmentRequest(ApiModel):
    user_ids: List[str]
    role_template_id: str
    store_id: str


class RoleTemplateListResponse(ApiModel):
    templates: List[RoleTemplate] = Field(default_factory=list)
    pagination: PaginationMeta = Field(default_factory=PaginationMeta)
