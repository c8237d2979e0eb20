from __future__ import annotations

from stockdesk.app.application.reactive import Signal
from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.ui.views.base import Navigate
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import UserRole
from stockdesk.sdk.validation import ClientValidationError

LOGIN_FAILED = "Invalid email or password"


class LoginView:
    def __init__(self, session: SessionState, navigate: Navigate) -> None:
        self.session = session
        self.navigate = navigate
        self.selected_role: Signal[UserRole] = Signal(UserRole.ADMIN)
        self.error: Signal[str] = Signal("")
        self.loading: Signal[bool] = Signal(False)

    def set_role(self, role: UserRole | str) -> None:
        self.selected_role.set(UserRole(role))

    def submit(self, email: str, password: str) -> bool:
        self.error.set("")
        self.loading.set(True)
        try:
            self.session.login(email, password, self.selected_role.value)
        except (ApiError, ClientValidationError) as error:
            self.error.set(ErrorMapper.to_message(error, LOGIN_FAILED))
            return False
        finally:
            self.loading.set(False)
        self.navigate("welcome")
        return True
