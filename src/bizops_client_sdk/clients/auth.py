from __future__ import annotations

from ..models import TokenResponse, UserResponse
from .base import BaseClient, require_object


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> TokenResponse:
        payload = {"email": email, "password": password}
        data = self.http.request("POST", "/auth/login", json_body=payload, module="auth", operation="login")
        if not isinstance(data, dict):
            raise ValueError("Expected login response to be a JSON object")
        return TokenResponse.from_payload(data)

    def me(self) -> UserResponse:
        data = self._request("GET", "/auth/me", module="auth", operation="me")
        return UserResponse.model_validate(require_object(data, "me"))

    def logout(self) -> None:
        self._request("POST", "/auth/logout", module="auth", operation="logout")
