from __future__ import annotations

from typing import Callable

from stockdesk.app.infrastructure.errors.error_mapper import ErrorMapper
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.components.mutation_feedback import FlashMessages
from stockdesk.app.ui.components.permission_gate import PermissionGate
from stockdesk.app.application.state.session_state import SessionState

Confirm = Callable[[str, str], bool]
Navigate = Callable[[str], None]


class PageController:
    """Owns a page's flash messages and the teardown of its subscriptions."""

    def __init__(self, session: SessionState, scheduler: Scheduler | None = None, flash_seconds: float = 2.0) -> None:
        self.session = session
        self.messages = FlashMessages(scheduler, success_seconds=flash_seconds)
        self._subscriptions: list[Callable[[], None]] = []
        self.disposed = False

    def admin_gate(self, action: str) -> bool:
        decision = PermissionGate.require_admin(self.session, action)
        if not decision.allowed:
            self.messages.show_error(decision.reason)
        return decision.allowed

    def report_failure(self, error: Exception, fallback: str) -> str:
        message = ErrorMapper.to_message(error, fallback)
        self.messages.show_error(message)
        return message

    def track(self, unsubscribe: Callable[[], None]) -> None:
        self._subscriptions.append(unsubscribe)

    def dispose(self) -> None:
        self.disposed = True
        self.messages.dispose()
        for unsubscribe in self._subscriptions:
            unsubscribe()
        self._subscriptions.clear()
