from __future__ import annotations

import locale
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence

from bizops_client_sdk.models import SortOrder

Accessor = Callable[[Any], Any]

# Dropdown values that mean "do not filter on this field".
ALL_SENTINELS = frozenset({"all", "all status", "all statuses"})


def field_getter(name: str) -> Accessor:
    def _get(record: Any) -> Any:
        if isinstance(record, Mapping):
            return record.get(name)
        return getattr(record, name, None)

    return _get


def is_all(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == "" or value.strip().casefold() in ALL_SENTINELS
    return False


@dataclass(frozen=True)
class ListViewConfig:
    """How one screen searches, filters and sorts its records.

    ``fields`` maps a logical field name to an accessor; names not listed fall
    back to attribute or key lookup.
    """

    search_fields: tuple[str, ...]
    fields: Mapping[str, Accessor] = field(default_factory=dict)
    status_field: str = "status"
    filter_fields: tuple[str, ...] = ()

    def value(self, record: Any, name: str) -> Any:
        accessor = self.fields.get(name) or field_getter(name)
        return accessor(record)


@dataclass(frozen=True)
class ListQuery:
    search: str = ""
    status: str | None = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    sort_field: str | None = None
    sort_order: SortOrder | str = SortOrder.ASC
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class ListPage:
    rows: list[Any]
    total_filtered: int
    total_pages: int
    page: int
    page_size: int

    @property
    def showing_from(self) -> int:
        if not self.rows:
            return 0
        return (self.page - 1) * self.page_size + 1

    @property
    def showing_to(self) -> int:
        if not self.rows:
            return 0
        return self.showing_from + len(self.rows) - 1

    def summary(self) -> str:
        return f"Showing {self.showing_from} to {self.showing_to} of {self.total_filtered}"


def matches_search(record: Any, term: str, layout: ListViewConfig) -> bool:
    if not term:
        return True
    needle = term.casefold()
    for name in layout.search_fields:
        value = layout.value(record, name)
        if value is not None and needle in str(value).casefold():
            return True
    return False


def matches_filter(record: Any, name: str, wanted: Any, layout: ListViewConfig) -> bool:
    if is_all(wanted):
        return True
    value = layout.value(record, name)
    if isinstance(value, Enum):
        value = value.value
    return value == wanted or (value is not None and str(value) == str(wanted))


def filter_records(records: Iterable[Any], query: ListQuery, layout: ListViewConfig) -> list[Any]:
    filtered = []
    for record in records:
        if not matches_search(record, query.search, layout):
            continue
        if not matches_filter(record, layout.status_field, query.status, layout):
            continue
        if not all(matches_filter(record, name, query.filters.get(name), layout) for name in layout.filter_fields):
            continue
        filtered.append(record)
    return filtered


def _sort_kind(values: Sequence[Any]) -> str | None:
    present = [value for value in values if value is not None]
    if not present:
        return None
    if all(isinstance(value, str) for value in present):
        return "text"
    if all(isinstance(value, (int, float, Decimal)) and not isinstance(value, bool) for value in present):
        return "number"
    if all(isinstance(value, date) for value in present):
        return "date"
    return None


def _text_key(value: str) -> str:
    return locale.strxfrm(value.casefold())


def sort_records(records: list[Any], field_name: str | None, order: SortOrder | str, layout: ListViewConfig) -> list[Any]:
    """Stable sort on one field.

    Strings sort case-insensitively with the active locale's collation,
    numbers and dates by value. A field whose values are of mixed or other
    types leaves the order untouched. Records with no value keep their
    relative order after the others in both directions.
    """
    if not field_name:
        return list(records)
    values = [layout.value(record, field_name) for record in records]
    kind = _sort_kind(values)
    if kind is None:
        return list(records)
    present = [(value, record) for value, record in zip(values, records) if value is not None]
    missing = [record for value, record in zip(values, records) if value is None]
    key = (lambda pair: _text_key(pair[0])) if kind == "text" else (lambda pair: pair[0])
    descending = SortOrder(order) is SortOrder.DESC
    try:
        ordered = sorted(present, key=key, reverse=descending)
    except TypeError:
        # e.g. naive and aware datetimes side by side
        return list(records)
    return [record for _, record in ordered] + missing


def paginate(rows: list[Any], page: int, page_size: int) -> ListPage:
    if page_size <= 0:
        raise ValueError("page_size must be greater than 0")
    page = max(page, 1)
    total = len(rows)
    start = (page - 1) * page_size
    return ListPage(
        rows=rows[start : start + page_size],
        total_filtered=total,
        total_pages=(total + page_size - 1) // page_size,
        page=page,
        page_size=page_size,
    )


def derive_list_view(records: Sequence[Any] | None, query: ListQuery, layout: ListViewConfig) -> ListPage:
    """Search, filter, sort and slice ``records`` into one page.

    Pure: ``records`` is never modified and ``None`` is treated as no records.
    """
    filtered = filter_records(records or (), query, layout)
    ordered = sort_records(filtered, query.sort_field, query.sort_order, layout)
    return paginate(ordered, query.page, query.page_size)
