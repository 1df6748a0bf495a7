from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ..models_sales import BusinessProfile
from ..validation import validate_business_profile
from .base import BaseClient, require_object, unwrap_data


@dataclass
class BusinessProfileClient(BaseClient):
    def get_profile(self) -> BusinessProfile | None:
        """Return the saved profile, or ``None`` when the backend asks for one to be set up."""
        payload = self._request("GET", "/invoice/get-business/details", module="business", operation="get")
        if isinstance(payload, dict) and payload.get("showBusinessForm"):
            return None
        data = unwrap_data(payload)
        if not isinstance(data, dict) or not data.get("businessName"):
            return None
        return BusinessProfile.model_validate(data)

    def save_profile(self, payload: BusinessProfile | Mapping[str, Any]) -> BusinessProfile:
        profile = validate_business_profile(payload)
        data = self._request(
            "POST",
            "/invoice/set-business/details",
            json_body=profile.to_payload(),
            module="business",
            operation="save",
        )
        if data is None:
            return profile
        return BusinessProfile.model_validate(require_object(data, "business profile"))
