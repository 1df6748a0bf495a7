from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .stores import CollectionState, RecordState


class ViewStateStatus(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    SUCCESS = "success"
    PARTIAL_ERROR = "partial_error"
    FATAL_ERROR = "fatal_error"
    NO_PERMISSION = "no_permission"
    NO_STORE = "no_store"


@dataclass(frozen=True)
class ViewState:
    status: ViewStateStatus
    message: str | None = None
    trace_id: str | None = None
    data_available: bool = False

    @property
    def blocking(self) -> bool:
        """True when the screen has nothing usable to show."""
        return not self.data_available and self.status is not ViewStateStatus.SUCCESS

    def render(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "trace_id": self.trace_id,
            "data_available": self.data_available,
        }


def resolve_state(
    *,
    can_view: bool,
    is_loading: bool,
    error: str | None,
    has_data: bool,
    store_selected: bool = True,
    trace_id: str | None = None,
    empty_message: str = "No data found",
) -> ViewState:
    """Pick the one state a screen renders.

    Order: permission, store selection, loading, errors (partial when stale
    rows are still on screen), empty, success.
    """
    if not can_view:
        return ViewState(ViewStateStatus.NO_PERMISSION, "You do not have access to this screen", trace_id)
    if not store_selected:
        return ViewState(ViewStateStatus.NO_STORE, "Select a store to continue", trace_id)
    if is_loading:
        return ViewState(ViewStateStatus.LOADING, "Loading...", trace_id, data_available=has_data)
    if error:
        status = ViewStateStatus.PARTIAL_ERROR if has_data else ViewStateStatus.FATAL_ERROR
        return ViewState(status, error, trace_id, data_available=has_data)
    if not has_data:
        return ViewState(ViewStateStatus.EMPTY, empty_message, trace_id)
    return ViewState(ViewStateStatus.SUCCESS, None, trace_id, data_available=True)


def state_of(
    container: CollectionState[Any] | RecordState[Any],
    *,
    can_view: bool = True,
    store_selected: bool = True,
    empty_message: str = "No data found",
) -> ViewState:
    if isinstance(container, RecordState):
        has_data = container.record is not None
    else:
        has_data = bool(container.items)
    return resolve_state(
        can_view=can_view,
        is_loading=container.loading,
        error=container.error,
        has_data=has_data,
        store_selected=store_selected,
        empty_message=empty_message,
    )
