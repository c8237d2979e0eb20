from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

from ..models import CreateUserRequest, MessageResponse, UpdateUserRequest, UserMutationResponse
from .base import BaseClient


@dataclass
class UsersClient(BaseClient):
    """User endpoints. Remote calls are keyed by username, not id."""

    def create_user(self, payload: CreateUserRequest | Mapping[str, Any]) -> UserMutationResponse:
        request = payload if isinstance(payload, CreateUserRequest) else CreateUserRequest.model_validate(payload)
        data = self._request(
            "POST",
            "/users",
            json_body=request.model_dump(mode="json", exclude_none=True),
            module="users",
            operation="create_user",
        )
        return UserMutationResponse.model_validate(data or {})

    def update_user(self, username: str, payload: UpdateUserRequest | Mapping[str, Any]) -> UserMutationResponse:
        request = payload if isinstance(payload, UpdateUserRequest) else UpdateUserRequest.model_validate(payload)
        data = self._request(
            "PUT",
            f"/users/{quote(username, safe='')}",
            json_body=request.model_dump(mode="json", exclude_none=True),
            module="users",
            operation="update_user",
        )
        return UserMutationResponse.model_validate(data or {})

    def delete_user(self, username: str) -> MessageResponse:
        data = self._request(
            "DELETE",
            f"/users/{quote(username, safe='')}",
            module="users",
            operation="delete_user",
        )
        return MessageResponse.model_validate(data if isinstance(data, dict) else {})
