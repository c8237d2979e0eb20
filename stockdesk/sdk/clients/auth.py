from __future__ import annotations

from ..models import LoginRequest, LoginResponse
from .base import BaseClient


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> LoginResponse:
        payload = LoginRequest(email=email, password=password)
        data = self.http.request(
            "POST",
            "/login",
            json_body=payload.model_dump(mode="json"),
            module="auth",
            operation="login",
        )
        if not isinstance(data, dict):
            raise ValueError("Expected login response to be a JSON object")
        return LoginResponse.model_validate(data)
