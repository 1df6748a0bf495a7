from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from bizops_client_sdk import ApiSession
from bizops_client_sdk.models import UserResponse

logger = logging.getLogger(__name__)

StoreListener = Callable[[str | None], None]


class NoStoreSelectedError(RuntimeError):
    def __init__(self) -> None:
        super().__init__("Select a store first")


@dataclass
class StoreContext:
    """The store every store-scoped request runs against.

    Backed by the session file: it starts from the persisted selection,
    persists every change and is emptied on logout.
    """

    session: ApiSession
    _listeners: list[StoreListener] = field(default_factory=list, repr=False)

    @property
    def store_id(self) -> str | None:
        return self.session.current_store_id

    def require(self) -> str:
        if not self.store_id:
            raise NoStoreSelectedError()
        return self.store_id

    def select(self, store_id: str | None) -> None:
        if store_id == self.store_id:
            return
        self.session.select_store(store_id)
        for listener in list(self._listeners):
            listener(store_id)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def clear(self) -> None:
        self.select(None)


@dataclass
class AppState:
    error_message: str | None = None
    status_message: str = "Ready"
    trace_id: str | None = None
    user: UserResponse | None = None
    allowed_permissions: set[str] = field(default_factory=set)
