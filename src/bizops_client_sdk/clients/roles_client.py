from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from ..models_roles import RoleAssignmentRequest, RoleTemplate, RoleTemplateListResponse, RoleTemplateRequest
from ..validation import ClientValidationError, ValidationIssue, validate_role_template_payload
from .base import BaseClient, require_object, unwrap_list, unwrap_pagination

ROLE_TEMPLATES_PATH = "/permissions/templates"


@dataclass
class RoleTemplatesClient(BaseClient):
    def list_templates(self) -> RoleTemplateListResponse:
        payload = self._request("GET", ROLE_TEMPLATES_PATH, module="roles", operation="list")
        rows = unwrap_list(payload, "templates", "roleTemplates")
        templates = [RoleTemplate.model_validate(row) for row in rows if isinstance(row, dict)]
        limit = max(len(templates), 1)
        pagination = unwrap_pagination(payload, count=len(templates), page=1, limit=limit)
        return RoleTemplateListResponse(templates=templates, pagination=pagination)

    def get_template(self, template_id: str) -> RoleTemplate:
        data = self._request("GET", f"{ROLE_TEMPLATES_PATH}/{template_id}", module="roles", operation="get")
        return RoleTemplate.model_validate(require_object(data, "role template"))

    def create_template(self, payload: RoleTemplateRequest | Mapping[str, Any]) -> RoleTemplate:
        request = validate_role_template_payload(payload)
        data = self._request(
            "POST",
            ROLE_TEMPLATES_PATH,
            json_body=request.to_payload(),
            module="roles",
            operation="create",
        )
        return RoleTemplate.model_validate(require_object(data, "create role template"))

    def update_template(self, template_id: str, payload: RoleTemplateRequest | Mapping[str, Any]) -> RoleTemplate:
        request = validate_role_template_payload(payload)
        data = self._request(
            "PUT",
            f"{ROLE_TEMPLATES_PATH}/{template_id}",
            json_body=request.to_payload(),
            module="roles",
            operation="update",
        )
        return RoleTemplate.model_validate(require_object(data, "update role template"))

    def delete_template(self, template_id: str) -> None:
        self._request("DELETE", f"{ROLE_TEMPLATES_PATH}/{template_id}", module="roles", operation="delete")

    def assign_to_users(self, template_id: str, user_ids: Sequence[str], store_id: str) -> dict[str, Any]:
        if not user_ids:
            raise ClientValidationError([ValidationIssue(None, "user_ids", "select at least one employee")])
        request = RoleAssignmentRequest(user_ids=list(user_ids), role_template_id=template_id, store_id=store_id)
        data = self._request(
            "POST",
            f"{ROLE_TEMPLATES_PATH}/assign",
            json_body=request.to_payload(),
            module="roles",
            operation="assign",
        )
        return data if isinstance(data, dict) else {}
