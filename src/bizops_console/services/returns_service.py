from __future__ import annotations

from typing import Any, Mapping, Sequence

from bizops_client_sdk.clients.returns_client import build_return_request, returnable_quantities
from bizops_client_sdk.models_sales import RefundMode, ReturnRecord, Sale

from ..stores import CollectionState
from .base import ServiceBase

RETURNS_CONTEXT = "returns.list"


class ReturnsService(ServiceBase):
    module = "returns"

    def __init__(self, *args: Any, state: CollectionState[ReturnRecord] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: CollectionState[ReturnRecord] = state or CollectionState()

    def fetch_returns(self) -> list[ReturnRecord] | None:
        result = self._fetch(
            self.state,
            "fetch",
            "Failed to fetch returns",
            RETURNS_CONTEXT,
            lambda _version: self.session.returns_client().list_returns(self.store.require()),
        )
        if result is not None:
            self.state.succeed(result)
        return result

    def process_return(
        self,
        sale: Sale,
        selections: Sequence[Mapping[str, Any]],
        *,
        mode: RefundMode | str = RefundMode.PERCENTAGE,
        value: Any = 100,
    ) -> list[ReturnRecord]:
        """Return the selected lines of ``sale``, refunding a share or a fixed amount of each line."""

        def _call() -> list[ReturnRecord]:
            request = build_return_request(sale, selections, mode=mode, value=value)
            return self.session.returns_client().create_return(
                request, available_quantities=returnable_quantities(sale)
            )

        def _apply(records: list[ReturnRecord]) -> None:
            for record in records:
                self.state.append(record)

        return self._mutate(self.state, "create", "Failed to process return", _call, _apply)
