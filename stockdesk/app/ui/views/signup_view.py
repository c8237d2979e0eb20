from __future__ import annotations

from stockdesk.app.application.reactive import Signal
from stockdesk.app.application.stores.users_store import UsersStore
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.scheduler import Cancelable, LoopScheduler, Scheduler
from stockdesk.app.ui.views.base import Navigate
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.validation import MIN_PASSWORD_LENGTH

SIGNUP_FAILED = "Failed to create account. Email or username may already exist."


class SignupView:
    def __init__(
        self,
        users: UsersStore,
        navigate: Navigate,
        scheduler: Scheduler | None = None,
        redirect_seconds: float = 2.0,
    ) -> None:
        self.users = users
        self.navigate = navigate
        self.scheduler = scheduler or LoopScheduler()
        self.redirect_seconds = redirect_seconds
        self.error: Signal[str] = Signal("")
        self.success: Signal[bool] = Signal(False)
        self.loading: Signal[bool] = Signal(False)
        self._redirect: Cancelable | None = None

    def validate(self, name: str, email: str, password: str, confirm_password: str) -> str | None:
        if not name.strip() or not email.strip() or not password.strip():
            return "Please fill in all fields"
        if password != confirm_password:
            return "Passwords do not match"
        if len(password) < MIN_PASSWORD_LENGTH:
            return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        return None

    def submit(self, name: str, email: str, password: str, confirm_password: str) -> bool:
        self.error.set("")
        self.success.set(False)
        problem = self.validate(name, email, password, confirm_password)
        if problem:
            self.error.set(problem)
            return False
        self.loading.set(True)
        try:
            self.users.register(name, email, password)
        except ApiError as error:
            self.error.set(ErrorMapper.to_message(error, SIGNUP_FAILED))
            return False
        finally:
            self.loading.set(False)
        self.success.set(True)
        self._redirect = self.scheduler.call_later(self.redirect_seconds, lambda: self.navigate("login"))
        return True

    def dispose(self) -> None:
        if self._redirect is not None:
            self._redirect.cancel()
            self._redirect = None
