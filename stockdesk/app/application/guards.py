from __future__ import annotations

from stockdesk.app.application.state.session_state import SessionState

LOGIN_ROUTE = "login"
WELCOME_ROUTE = "welcome"


def admin_guard(session: SessionState) -> str | None:
    """Return the route to redirect to, or ``None`` when the admin page may open."""
    if session.is_authenticated.value and session.is_admin():
        return None
    if session.is_authenticated.value:
        return WELCOME_ROUTE
    return LOGIN_ROUTE


def auth_guard(session: SessionState) -> str | None:
    return None if session.is_authenticated.value else LOGIN_ROUTE
