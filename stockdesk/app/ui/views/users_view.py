from __future__ import annotations

from typing import Any

from stockdesk.app.application.state.session_state import SessionState
from stockdesk.app.application.stores.users_store import UsersStore
from stockdesk.app.infrastructure.scheduler import Scheduler
from stockdesk.app.ui.components.permission_gate import PermissionGate
from stockdesk.app.ui.derived_view import DerivedView
from stockdesk.app.ui.filters import USER_SEARCH_FIELDS, Predicate, search_filter
from stockdesk.app.ui.forms import EditorText, FormEditor, UserForm
from stockdesk.app.ui.views.base import Confirm, Navigate, PageController
from stockdesk.sdk.exceptions import ApiError
from stockdesk.sdk.models import User
from stockdesk.sdk.validation import ClientValidationError

USER_TEXT = EditorText(
    created="User created successfully",
    updated="User updated successfully",
    create_failed="Failed to create user. Email or username may already exist.",
    update_failed="Failed to update user",
)


def user_predicates(filters: dict[str, Any]) -> list[Predicate | None]:
    return [search_filter(filters.get("search"), USER_SEARCH_FIELDS)]


class UsersView(PageController):
    def __init__(
        self,
        session: SessionState,
        users: UsersStore,
        *,
        confirm: Confirm,
        navigate: Navigate | None = None,
        scheduler: Scheduler | None = None,
        page_size: int = 10,
        flash_seconds: float = 2.0,
    ) -> None:
        super().__init__(session, scheduler, flash_seconds)
        self.users = users
        self.confirm = confirm
        self.navigate = navigate
        self.view: DerivedView[User] = DerivedView(users.items, user_predicates, page_size=page_size)
        self.track(self.view.dispose)
        self.editor: FormEditor[UserForm, User] = FormEditor(
            defaults=UserForm,
            from_entity=UserForm.from_user,
            create=lambda form: users.create(form.name, form.email, form.role, form.password),
            update=lambda user, form: users.update(user.id, form.name, form.email, form.role, form.password),
            messages=self.messages,
            text=USER_TEXT,
            gate=lambda verb: PermissionGate.require_admin(session, f"{verb} users"),
        )

    def open(self) -> None:
        self.users.load()

    def set_search(self, term: str) -> None:
        self.view.set_filter("search", term)

    def delete(self, user_id: str) -> bool:
        if not self.admin_gate("delete users"):
            return False
        user = self.users.get_by_id(user_id)
        if user is None:
            self.messages.show_error("User not found")
            return False
        if not self.confirm(
            "Delete User?",
            f'Are you sure you want to delete user "{user.name}"? This action cannot be undone.',
        ):
            return False
        try:
            self.users.delete(user_id)
        except (ApiError, ClientValidationError) as error:
            self.report_failure(error, "Failed to delete user")
            return False
        if not self.session.is_authenticated.value:
            if self.navigate is not None:
                self.navigate("login")
            return True
        self.messages.flash_success("User has been deleted successfully.")
        return True

    def render(self) -> dict[str, Any]:
        current = self.session.current_user.value
        return {
            **self.view.result.value.render(),
            "current_user_id": current.id if current else None,
            "load_error": self.users.error.value,
            "error": self.messages.error.value,
            "success": self.messages.success.value,
            "editor": self.editor.mode.value.value,
        }
