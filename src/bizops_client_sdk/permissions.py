from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

from .models_employees import PermissionGrant, usable_grants


def _grant_actions(grant: Any) -> Any:
    if isinstance(grant, PermissionGrant):
        return grant.actions
    if isinstance(grant, Mapping):
        return grant.get("actions")
    return getattr(grant, "actions", None)


def permission_count(permissions: Any) -> int:
    """Total number of granted actions across all resources.

    Anything that is not a non-empty list counts as zero, and so does a grant
    whose ``actions`` is missing or is not a list.
    """
    if not isinstance(permissions, list) or not permissions:
        return 0
    total = 0
    for grant in permissions:
        actions = _grant_actions(grant)
        if isinstance(actions, (list, tuple, set)):
            total += len(actions)
    return total


def coerce_grants(permissions: Any) -> list[PermissionGrant]:
    return [
        entry if isinstance(entry, PermissionGrant) else PermissionGrant.model_validate(dict(entry))
        for entry in usable_grants(permissions)
    ]


def duplicate_grant_keys(permissions: Sequence[PermissionGrant | Mapping[str, Any]]) -> list[tuple[str, str | None]]:
    """(resource, store) pairs that appear in more than one grant, in first-seen order."""
    counts = Counter(grant.key for grant in coerce_grants(list(permissions)))
    return [key for key, seen in counts.items() if seen > 1]


def toggle_action(
    permissions: Sequence[PermissionGrant],
    *,
    resource: str,
    action: str,
    store_id: str | None,
) -> list[PermissionGrant]:
    """Return a copy of ``permissions`` with ``action`` flipped for (resource, store).

    A grant left without actions is dropped; a missing grant is appended.
    """
    updated: list[PermissionGrant] = []
    found = False
    for grant in permissions:
        if grant.key != (resource, store_id) or found:
            updated.append(grant)
            continue
        found = True
        if action in grant.actions:
            actions = [item for item in grant.actions if item != action]
        else:
            actions = [*grant.actions, action]
        if actions:
            updated.append(grant.model_copy(update={"actions": actions}))
    if not found:
        updated.append(PermissionGrant(resource=resource, actions=[action], store_id=store_id))
    return updated


def grants_for_store(permissions: Sequence[PermissionGrant], store_id: str) -> list[PermissionGrant]:
    return [grant for grant in permissions if grant.store_id in (store_id, None)]
