from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Generic, TypeVar

from bizops_client_sdk.models import SortOrder

from ..table_state import ListPage, ListQuery, ListViewConfig, derive_list_view

T = TypeVar("T")


@dataclass
class ListViewModel(Generic[T]):
    """Screen-side list state: the records plus the user's search/filter/sort/page choices.

    Changing the search, a filter or the page size jumps back to page 1.
    """

    layout: ListViewConfig
    records: list[T] | None = None
    query: ListQuery = field(default_factory=ListQuery)
    selected_id: str | None = None

    def page(self) -> ListPage:
        return derive_list_view(self.records, self.query, self.layout)

    def set_search(self, term: str) -> None:
        self.query = replace(self.query, search=term, page=1)

    def set_status(self, status: str | None) -> None:
        self.query = replace(self.query, status=status, page=1)

    def set_filter(self, name: str, value: Any) -> None:
        self.query = replace(self.query, filters={**self.query.filters, name: value}, page=1)

    def set_page_size(self, page_size: int) -> None:
        self.query = replace(self.query, page_size=page_size, page=1)

    def go_to(self, page: int) -> None:
        total_pages = self.page().total_pages
        self.query = replace(self.query, page=min(max(page, 1), max(total_pages, 1)))

    def sort_by(self, field_name: str) -> None:
        """Sort on ``field_name``; choosing the current field again flips the direction."""
        if self.query.sort_field == field_name:
            current = SortOrder(self.query.sort_order)
            order = SortOrder.DESC if current is SortOrder.ASC else SortOrder.ASC
        else:
            order = SortOrder.ASC
        self.query = replace(self.query, sort_field=field_name, sort_order=order)

    def selected(self) -> T | None:
        for record in self.records or []:
            if str(self.layout.value(record, "id")) == str(self.selected_id):
                return record
        return None
