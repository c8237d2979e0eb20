from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError as ModelValidationError

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.remote_store import RemoteStore
from stockdesk.sdk.clients.users_client import UsersClient
from stockdesk.sdk.local_cache import USERS_KEY, LocalCache
from stockdesk.sdk.models import CreateUserRequest, UpdateUserRequest, User, UserRole
from stockdesk.sdk.validation import (
    raise_issue,
    resolve_new_user_password,
    validate_user_fields,
)


class UsersStore(RemoteStore[User]):
    """User records.

    The backend exposes no list endpoint, so the snapshot is read from the
    ``users`` cache. Remote calls are keyed by username, cache records by id;
    renaming a user changes its remote key.
    """

    resource = "users"
    load_fallback = "Failed to load users"

    def __init__(self, session: SessionState, client: UsersClient, cache: LocalCache) -> None:
        super().__init__(session)
        self.client = client
        self.cache = cache

    def fetch(self, params: Any) -> list[User]:
        users: list[User] = []
        for record in self.cache.get(USERS_KEY, []) or []:
            try:
                users.append(User.model_validate(record))
            except ModelValidationError:
                continue
        return users

    def get_by_id(self, user_id: str) -> User | None:
        return next((user for user in self.items.value if user.id == user_id), None)

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return any(user.email == email and user.id != exclude_id for user in self.items.value)

    def register(self, name: str, email: str, password: str) -> User:
        """Self-signup: always creates a ``user`` role account, no admin check."""
        request = CreateUserRequest(username=name.strip(), email=email.strip(), password=password, role=UserRole.USER)
        return self._mutate("register", lambda: self._create_remote(request))

    def create(self, name: str, email: str, role: UserRole | str = UserRole.USER, password: str | None = None) -> User:
        self.session.require_admin("create users")
        validate_user_fields(name, email, label="Username")
        resolved_password = resolve_new_user_password(name.strip(), password)
        if self.email_taken(email):
            raise_issue("email", "Email already exists")
        request = CreateUserRequest(
            username=name.strip(),
            email=email.strip(),
            password=resolved_password,
            role=UserRole(role),
        )
        return self._mutate("create", lambda: self._create_remote(request))

    def update(
        self,
        user_id: str,
        name: str,
        email: str,
        role: UserRole | str,
        password: str | None = None,
    ) -> User:
        self.session.require_admin("update users")
        existing = self.get_by_id(user_id)
        if existing is None:
            raise_issue("id", "User not found")
        validate_user_fields(name, email, label="Name")
        if self.email_taken(email, exclude_id=user_id):
            raise_issue("email", "Email already exists")
        request = UpdateUserRequest(
            username=name.strip(),
            email=email.strip(),
            role=UserRole(role),
            password=password if (password or "").strip() else None,
        )
        updated = User(id=user_id, email=request.email, name=request.username, role=request.role)

        def call() -> User:
            self.client.update_user(existing.name, request)
            self._write_records([
                _record(updated) if record.get("id") == user_id else record for record in self._records()
            ])
            self.session.update_current_user(updated)
            return updated

        return self._mutate("update", call)

    def delete(self, user_id: str) -> None:
        self.session.require_admin("delete users")
        existing = self.get_by_id(user_id)
        if existing is None:
            raise_issue("id", "User not found")

        def call() -> None:
            self.client.delete_user(existing.name)
            self._write_records([record for record in self._records() if record.get("id") != user_id])

        self._mutate("delete", call)
        current = self.session.current_user.value
        if current is not None and current.id == user_id:
            self.session.logout()

    def _create_remote(self, request: CreateUserRequest) -> User:
        response = self.client.create_user(request)
        user = User(
            id=response.id or str(int(time.time() * 1000)),
            email=request.email,
            name=request.username,
            role=request.role,
        )
        self._write_records([*self._records(), _record(user)])
        return user

    def _records(self) -> list[dict[str, Any]]:
        records = self.cache.get(USERS_KEY, []) or []
        return [record for record in records if isinstance(record, dict)]

    def _write_records(self, records: list[dict[str, Any]]) -> None:
        self.cache.set(USERS_KEY, records)


def _record(user: User) -> dict[str, Any]:
    return user.model_dump(mode="json")
