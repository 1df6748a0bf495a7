from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# The backend reads amounts as JSON numbers, not strings.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ApiModel(BaseModel):
    """Base for payloads exchanged with the backend, which speaks camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PaginationMeta(ApiModel):
    page: int = 1
    limit: int = 10
    total: int = 0
    total_pages: int = 0

    @classmethod
    def for_items(cls, count: int, page: int, limit: int) -> "PaginationMeta":
        total_pages = (count + limit - 1) // limit if limit > 0 else 0
        return cls(page=page, limit=limit, total=count, total_pages=total_pages)


class TokenResponse(ApiModel):
    token: str
    user: Optional["UserResponse"] = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenResponse":
        data = payload.get("data") if isinstance(payload.get("data"), dict) else payload
        token = data.get("token") or data.get("accessToken") or data.get("access_token")
        return cls.model_validate({**data, "token": token})


class UserResponse(ApiModel):
    id: str
    email: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    role: str | None = None
    store_ids: list[str] = Field(default_factory=list)


class SessionData(BaseModel):
    access_token: str
    user: Optional[UserResponse] = None
    env_name: str | None = None
    current_store_id: str | None = None


TokenResponse.model_rebuild()
