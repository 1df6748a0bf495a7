from __future__ import annotations

import pytest

from bizops_client_sdk.models_employees import PermissionGrant
from bizops_client_sdk.permissions import (
    duplicate_grant_keys,
    grants_for_store,
    permission_count,
    toggle_action,
)


@pytest.mark.parametrize("value", [None, "x", [], {}, 3])
def test_permission_count_non_list_or_empty_is_zero(value) -> None:
    assert permission_count(value) == 0


def test_permission_count_sums_actions() -> None:
    grants = [
        {"resource": "employees", "actions": ["read", "write"]},
        PermissionGrant(resource="sales", actions=["read"]),
    ]
    assert permission_count(grants) == 3


def test_permission_count_ignores_malformed_actions() -> None:
    grants = [
        {"resource": "employees", "actions": "read"},
        {"resource": "sales"},
        {"resource": "invoices", "actions": None},
        "garbage",
        {"resource": "returns", "actions": ["create"]},
    ]
    assert permission_count(grants) == 1


def test_toggle_action_adds_and_removes() -> None:
    grants = [PermissionGrant(resource="sales", actions=["read"], store_id="s1")]

    added = toggle_action(grants, resource="sales", action="write", store_id="s1")
    assert added[0].actions == ["read", "write"]
    assert grants[0].actions == ["read"]

    removed = toggle_action(added, resource="sales", action="read", store_id="s1")
    assert removed[0].actions == ["write"]

    emptied = toggle_action(removed, resource="sales", action="write", store_id="s1")
    assert emptied == []


def test_toggle_action_appends_missing_grant() -> None:
    updated = toggle_action([], resource="employees", action="read", store_id="s2")
    assert updated == [PermissionGrant(resource="employees", actions=["read"], store_id="s2")]


def test_duplicate_grant_keys_reports_repeated_resource_store_pairs() -> None:
    grants = [
        {"resource": "sales", "actions": ["read"], "storeId": "s1"},
        {"resource": "sales", "actions": ["write"], "storeId": "s1"},
        {"resource": "sales", "actions": ["read"], "storeId": "s2"},
    ]
    assert duplicate_grant_keys(grants) == [("sales", "s1")]


def test_grants_for_store_includes_global_grants() -> None:
    grants = [
        PermissionGrant(resource="sales", actions=["read"], store_id="s1"),
        PermissionGrant(resource="reports", actions=["read"]),
        PermissionGrant(resource="sales", actions=["read"], store_id="s2"),
    ]
    assert [grant.resource for grant in grants_for_store(grants, "s1")] == ["sales", "reports"]
