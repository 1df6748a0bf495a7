from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from bizops_client_sdk.models_roles import RoleTemplate, RoleTemplateListResponse
from bizops_client_sdk.permissions import duplicate_grant_keys

from ..stores import CollectionState
from .base import ServiceBase

logger = logging.getLogger(__name__)

ROLE_TEMPLATES_CONTEXT = "roles.list"


class RoleTemplatesService(ServiceBase):
    module = "roles"

    def __init__(self, *args: Any, state: CollectionState[RoleTemplate] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[RoleTemplate] = state or CollectionState()

    def fetch_templates(self) -> RoleTemplateListResponse | None:
        result = self._fetch(
            self.state,
            "fetch",
            "Failed to fetch role templates",
            ROLE_TEMPLATES_CONTEXT,
            lambda _version: self.session.role_templates_client().list_templates(),
        )
        if result is not None:
            self.state.succeed(result.templates, result.pagination)
        return result

    def create_template(self, payload: Mapping[str, Any]) -> RoleTemplate:
        self._warn_duplicates(payload)
        return self._mutate(
            self.state,
            "create",
            "Failed to create role template",
            lambda: self.session.role_templates_client().create_template(payload),
            self.state.append,
        )

    def update_template(self, template_id: str, payload: Mapping[str, Any]) -> RoleTemplate:
        self._warn_duplicates(payload)
        return self._mutate(
            self.state,
            "update",
            "Failed to update role template",
            lambda: self.session.role_templates_client().update_template(template_id, payload),
            self._upsert,
        )

    def delete_template(self, template_id: str) -> None:
        self._mutate(
            self.state,
            "delete",
            "Failed to delete role template",
            lambda: self.session.role_templates_client().delete_template(template_id),
            lambda _: self.state.remove(template_id),
        )

    def assign_to_users(self, template_id: str, user_ids: Sequence[str]) -> dict[str, Any]:
        return self._mutate(
            self.state,
            "assign",
            "Failed to assign role template",
            lambda: self.session.role_templates_client().assign_to_users(
                template_id, user_ids, self.store.require()
            ),
        )

    def _upsert(self, template: RoleTemplate) -> None:
        if not self.state.replace(template):
            self.state.append(template)

    @staticmethod
    def _warn_duplicates(payload: Mapping[str, Any]) -> None:
        permissions = payload.get("permissions")
        if not isinstance(permissions, list):
            return
        duplicates = duplicate_grant_keys(permissions)
        if duplicates:
            logger.warning("role_template_duplicate_grants", extra={"grant_keys": duplicates})
