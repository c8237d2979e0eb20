from __future__ import annotations

import time
from typing import Any

from pydantic import ValidationError as ModelValidationError

from stockdesk.app.application.reactive import Signal
from stockdesk.app.infrastructure.logging.logger import get_logger, log_action
from stockdesk.sdk.auth_store import AuthStore
from stockdesk.sdk.clients.auth import AuthClient
from stockdesk.sdk.exceptions import ApiError, InvalidResponseError
from stockdesk.sdk.local_cache import CURRENT_USER_KEY, USERS_KEY, LocalCache
from stockdesk.sdk.models import User, UserRole
from stockdesk.sdk.validation import AdminRequiredError, RoleMismatchError, raise_issue

logger = get_logger("stockdesk.session")


class SessionState:
    """Authenticated identity, mirrored into the ``currentUser`` cache record.

    The token itself lives in the cache under ``authToken`` and is read by the
    SDK clients on every call; this object never hands it out.
    """

    def __init__(self, auth_client: AuthClient, cache: LocalCache, auth_store: AuthStore | None = None) -> None:
        self.auth_client = auth_client
        self.cache = cache
        self.auth_store = auth_store or AuthStore(cache=cache)
        self.current_user: Signal[User | None] = Signal(None)
        self.is_authenticated: Signal[bool] = Signal(False)

    @property
    def role(self) -> str | None:
        user = self.current_user.value
        return user.role.value if user else None

    def login(self, email: str, password: str, selected_role: UserRole | str) -> User:
        email = (email or "").strip()
        if not email or not (password or "").strip():
            raise_issue("email", "Please fill in all fields")
        selected = UserRole(selected_role)

        try:
            response = self.auth_client.login(email, password)
        except ApiError as error:
            log_action(logger, "session", "login", None, error.trace_id, "error", {"code": error.code})
            raise

        if not response.username or not response.role:
            raise InvalidResponseError(
                code="INVALID_RESPONSE",
                message="Invalid response from server",
                details={"fields": ["username", "role"]},
                trace_id=None,
                status_code=200,
                raw_payload=response.model_dump(exclude={"token"}),
            )
        if response.role != selected.value:
            log_action(logger, "session", "login", response.role, None, "rejected", {"reason": "role_mismatch"})
            raise_issue("role", f"Please log in using the {response.role} tab.", RoleMismatchError)

        if response.token:
            self.auth_store.set_token(response.token)
        user = User(
            id=self._resolve_user_id(email, response.username),
            email=email,
            name=response.username,
            role=UserRole(response.role),
        )
        self._establish(user)
        log_action(logger, "session", "login", user.role.value, None, "success")
        return user

    def logout(self) -> None:
        role = self.role
        self.cache.remove(CURRENT_USER_KEY)
        self.auth_store.clear()
        self.current_user.set(None)
        self.is_authenticated.set(False)
        log_action(logger, "session", "logout", role, None, "success")

    def restore(self) -> User | None:
        """Re-establish the session from the cached ``currentUser`` record, if valid."""
        record = self.cache.get(CURRENT_USER_KEY)
        if not isinstance(record, dict):
            return None
        try:
            user = User.model_validate(record)
        except ModelValidationError:
            self.cache.remove(CURRENT_USER_KEY)
            return None
        self.current_user.set(user)
        self.is_authenticated.set(True)
        log_action(logger, "session", "restore", user.role.value, None, "success")
        return user

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def require_admin(self, action: str) -> None:
        if not self.is_admin():
            raise_issue("role", f"Only administrators can {action}.", AdminRequiredError)

    def update_current_user(self, user: User) -> None:
        current = self.current_user.value
        if current is None or current.id != user.id:
            return
        self.cache.set(CURRENT_USER_KEY, _cache_record(user))
        self.current_user.set(user)

    def _establish(self, user: User) -> None:
        self.cache.set(CURRENT_USER_KEY, _cache_record(user))
        self.current_user.set(user)
        self.is_authenticated.set(True)

    def _resolve_user_id(self, email: str, username: str) -> str:
        # Reuse the cached id so the users page can recognise the logged-in account.
        for record in self.cache.get(USERS_KEY, []) or []:
            if isinstance(record, dict) and (record.get("email") == email or record.get("name") == username):
                if record.get("id") is not None:
                    return str(record["id"])
        return str(int(time.time() * 1000))


def _cache_record(user: User) -> dict[str, Any]:
    return user.model_dump(mode="json")
