from .bootstrap import BootstrapResult, ConsoleBootstrap, configure_logging
from .debounce import SearchDebouncer
from .state import AppState, NoStoreSelectedError, StoreContext
from .stores import CollectionState, RecordState, StateBusyError
from .table_state import ListPage, ListQuery, ListViewConfig, derive_list_view
from .view_state import ViewState, ViewStateStatus, resolve_state, state_of

__all__ = [
    "AppState",
    "BootstrapResult",
    "CollectionState",
    "ConsoleBootstrap",
    "ListPage",
    "ListQuery",
    "ListViewConfig",
    "NoStoreSelectedError",
    "RecordState",
    "SearchDebouncer",
    "StateBusyError",
    "StoreContext",
    "ViewState",
    "ViewStateStatus",
    "configure_logging",
    "derive_list_view",
    "resolve_state",
    "state_of",
]
