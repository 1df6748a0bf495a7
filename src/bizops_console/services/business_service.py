from __future__ import annotations

from typing import Any, Mapping

from bizops_client_sdk.models_sales import BusinessProfile

from ..stores import RecordState
from .base import ServiceBase

BUSINESS_CONTEXT = "business.profile"


class BusinessProfileService(ServiceBase):
    module = "business"

    def __init__(self, *args: Any, state: RecordState[BusinessProfile] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.state: RecordState[BusinessProfile] = state or RecordState()

    @property
    def needs_setup(self) -> bool:
        return self.state.record is None and not self.state.loading and self.state.error is None

    def load_profile(self) -> BusinessProfile | None:
        # Wrapped so a missing profile is told apart from a superseded read.
        loaded = self._fetch(
            self.state,
            "fetch",
            "Failed to fetch business details",
            BUSINESS_CONTEXT,
            lambda _version: (self.session.business_client().get_profile(),),
        )
        if loaded is None:
            return self.state.record
        self.state.succeed(loaded[0])
        return loaded[0]

    def save_profile(self, payload: Mapping[str, Any]) -> BusinessProfile:
        return self._mutate(
            self.state,
            "save",
            "Failed to save business details",
            lambda: self.session.business_client().save_profile(payload),
            lambda profile: setattr(self.state, "record", profile),
        )
