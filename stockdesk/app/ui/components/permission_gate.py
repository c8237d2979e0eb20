from dataclasses import dataclass

from stockdesk.app.application.state.session_state import SessionState


@dataclass(frozen=True)
class GateResult:
    allowed: bool
    reason: str = ""


class PermissionGate:
    @staticmethod
    def require_admin(session: SessionState, action: str) -> GateResult:
        if session.is_admin():
            return GateResult(True)
        return GateResult(False, f"Only administrators can {action}.")
