from __future__ import annotations

from typing import Any

from bizops_client_sdk.models_sales import Invoice

from ..stores import CollectionState
from .base import ServiceBase

INVOICES_CONTEXT = "invoices.list"


class InvoicesService(ServiceBase):
    module = "invoices"

    def __init__(self, *args: Any, state: CollectionState[Invoice] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[Invoice] = state or CollectionState()

    def fetch_invoices(self) -> list[Invoice] | None:
        result = self._fetch(
            self.state,
            "fetch",
            "Failed to fetch invoices",
            INVOICES_CONTEXT,
            lambda _version: self.session.invoices_client().list_invoices(self.store.require()),
        )
        if result is not None:
            self.state.succeed(result)
        return result
