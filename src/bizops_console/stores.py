from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from bizops_client_sdk.models import PaginationMeta

T = TypeVar("T")


class StateBusyError(RuntimeError):
    """A mutation was started while the container was already loading."""


def _record_id(item: Any) -> Any:
    if isinstance(item, dict):
        return item.get("id")
    return getattr(item, "id", None)


@dataclass
class CollectionState(Generic[T]):
    """Last-fetched collection for one entity plus its loading/error flags.

    Only fetches replace ``items`` wholesale; create/update/delete touch a
    single record.
    """

    items: list[T] = field(default_factory=list)
    loading: bool = False
    error: str | None = None
    pagination: PaginationMeta = field(default_factory=PaginationMeta)
    key: Callable[[Any], Any] = _record_id

    def begin(self, *, exclusive: bool = False) -> None:
        if exclusive and self.loading:
            raise StateBusyError("Another request is still in progress")
        self.loading = True
        self.error = None

    def succeed(self, items: list[T] | None = None, pagination: PaginationMeta | None = None) -> None:
        if items is not None:
            self.items = list(items)
        if pagination is not None:
            self.pagination = pagination
        self.loading = False

    def fail(self, message: str) -> None:
        self.loading = False
        self.error = message

    def settle(self) -> None:
        self.loading = False

    def find(self, item_id: Any) -> T | None:
        for item in self.items:
            if self.key(item) == item_id:
                return item
        return None

    def append(self, item: T) -> None:
        self.items = [*self.items, item]

    def replace(self, item: T) -> bool:
        target = self.key(item)
        for idx, existing in enumerate(self.items):
            if self.key(existing) == target:
                self.items = [*self.items[:idx], item, *self.items[idx + 1 :]]
                return True
        return False

    def remove(self, item_id: Any) -> bool:
        kept = [item for item in self.items if self.key(item) != item_id]
        removed = len(kept) != len(self.items)
        self.items = kept
        return removed


@dataclass
class RecordState(Generic[T]):
    """Single-record container, e.g. the business profile."""

    record: T | None = None
    loading: bool = False
    error: str | None = None

    def begin(self, *, exclusive: bool = False) -> None:
        if exclusive and self.loading:
            raise StateBusyError("Another request is still in progress")
        self.loading = True
        self.error = None

    def succeed(self, record: T | None) -> None:
        self.record = record
        self.loading = False

    def fail(self, message: str) -> None:
        self.loading = False
        self.error = message
