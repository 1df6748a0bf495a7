from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from bizops_client_sdk.models import SortOrder
from bizops_client_sdk.models_employees import Employee
from bizops_client_sdk.models_order_tracking import TrackingOrder
from bizops_console.table_state import (
    ListQuery,
    ListViewConfig,
    derive_list_view,
    is_all,
    paginate,
    sort_records,
)
from bizops_console.views import EMPLOYEE_LIST_CONFIG, TRACKING_LIST_CONFIG

LIST_CONFIG = ListViewConfig(search_fields=("name", "code"))


def _employees() -> list[Employee]:
    return [
        Employee.model_validate({"id": "1", "firstName": "Ann", "status": "active"}),
        Employee.model_validate({"id": "2", "firstName": "Bob", "status": "inactive"}),
    ]


def test_search_matches_substring_case_insensitively() -> None:
    page = derive_list_view(_employees(), ListQuery(search="an", status="All Status", page_size=10), EMPLOYEE_LIST_CONFIG)

    assert [employee.first_name for employee in page.rows] == ["Ann"]
    assert page.total_pages == 1
    assert page.summary() == "Showing 1 to 1 of 1"


@pytest.mark.parametrize("sentinel", [None, "", "all", "All", "All Status", "ALL STATUSES"])
def test_all_sentinels_disable_status_filter(sentinel) -> None:
    page = derive_list_view(_employees(), ListQuery(status=sentinel), EMPLOYEE_LIST_CONFIG)
    assert page.total_filtered == 2
    assert is_all(sentinel)


def test_status_filter_is_exact() -> None:
    page = derive_list_view(_employees(), ListQuery(status="active"), EMPLOYEE_LIST_CONFIG)
    assert [employee.id for employee in page.rows] == ["1"]
    assert derive_list_view(_employees(), ListQuery(status="activ"), EMPLOYEE_LIST_CONFIG).rows == []


def test_none_records_yield_empty_page() -> None:
    page = derive_list_view(None, ListQuery(), LIST_CONFIG)
    assert page.rows == []
    assert page.total_pages == 0
    assert page.summary() == "Showing 0 to 0 of 0"


def test_derivation_does_not_mutate_input() -> None:
    records = [{"name": "b"}, {"name": "a"}]
    snapshot = list(records)

    derive_list_view(records, ListQuery(sort_field="name"), LIST_CONFIG)

    assert records == snapshot


def test_text_sort_is_idempotent_and_reversible() -> None:
    records = [{"name": "delta"}, {"name": "Alpha"}, {"name": "charlie"}, {"name": "Bravo"}]

    once = sort_records(records, "name", SortOrder.ASC, LIST_CONFIG)
    twice = sort_records(once, "name", SortOrder.ASC, LIST_CONFIG)
    descending = sort_records(records, "name", "desc", LIST_CONFIG)

    assert [r["name"] for r in once] == ["Alpha", "Bravo", "charlie", "delta"]
    assert twice == once
    assert descending == list(reversed(once))


def test_sort_keeps_ties_in_input_order() -> None:
    records = [{"name": "same", "code": 1}, {"name": "other", "code": 2}, {"name": "Same", "code": 3}]
    ordered = sort_records(records, "name", SortOrder.ASC, LIST_CONFIG)
    assert [r["code"] for r in ordered] == [2, 1, 3]


def test_numeric_and_date_fields_sort_by_value() -> None:
    records = [
        {"amount": Decimal("10"), "day": date(2024, 3, 1)},
        {"amount": Decimal("2.5"), "day": date(2024, 1, 1)},
        {"amount": 7, "day": date(2024, 2, 1)},
    ]
    by_amount = sort_records(records, "amount", SortOrder.ASC, LIST_CONFIG)
    by_day = sort_records(records, "day", SortOrder.DESC, LIST_CONFIG)

    assert [r["amount"] for r in by_amount] == [Decimal("2.5"), 7, Decimal("10")]
    assert [r["day"].month for r in by_day] == [3, 2, 1]


def test_mixed_types_leave_order_untouched() -> None:
    records = [{"code": "b"}, {"code": 1}, {"code": "a"}]
    assert sort_records(records, "code", SortOrder.ASC, LIST_CONFIG) == records


def test_missing_values_sort_last_in_both_directions() -> None:
    records = [{"name": None}, {"name": "b"}, {"name": "a"}]
    assert [r["name"] for r in sort_records(records, "name", SortOrder.ASC, LIST_CONFIG)] == ["a", "b", None]
    assert [r["name"] for r in sort_records(records, "name", SortOrder.DESC, LIST_CONFIG)] == ["b", "a", None]


def test_pagination_covers_every_record_once() -> None:
    rows = list(range(23))
    pages = [paginate(rows, page, 5) for page in range(1, 6)]

    assert [len(page.rows) for page in pages] == [5, 5, 5, 5, 3]
    assert sum((page.rows for page in pages), []) == rows
    assert pages[-1].total_pages == 5
    assert pages[-1].summary() == "Showing 21 to 23 of 23"


def test_pagination_past_the_end_is_empty_and_page_size_must_be_positive() -> None:
    assert paginate([1, 2], 3, 10).rows == []
    with pytest.raises(ValueError):
        paginate([1], 1, 0)


def test_tracking_filters_on_verification_and_payment_type(tracking_payload) -> None:
    orders = [
        TrackingOrder.model_validate(tracking_payload("o1")),
        TrackingOrder.model_validate(tracking_payload("o2", isVerified=True, status="verified", paymentType="CARD")),
        TrackingOrder.model_validate(tracking_payload("o3", customerName="Lake Cafe", paymentType="CARD")),
    ]

    unverified_card = derive_list_view(
        orders, ListQuery(filters={"verification": "unverified", "payment_type": "CARD"}), TRACKING_LIST_CONFIG
    )
    by_customer = derive_list_view(orders, ListQuery(search="lake"), TRACKING_LIST_CONFIG)

    assert [order.id for order in unverified_card.rows] == ["o3"]
    assert [order.id for order in by_customer.rows] == ["o3"]


def test_permission_count_field_sorts_numerically() -> None:
    employees = [
        Employee.model_validate({"id": "1", "permissions": [{"resource": "sales", "actions": ["read", "write"]}]}),
        Employee.model_validate({"id": "2", "permissions": []}),
        Employee.model_validate({"id": "3", "permissions": [{"resource": "sales", "actions": ["read"]}]}),
    ]
    page = derive_list_view(employees, ListQuery(sort_field="permission_count"), EMPLOYEE_LIST_CONFIG)
    assert [employee.id for employee in page.rows] == ["2", "3", "1"]
